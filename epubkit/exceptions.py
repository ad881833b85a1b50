"""
Exceptions raised while building an EPUB
"""


class EpubError(Exception):
    """Base class for all packer errors"""


class ArchiveError(EpubError):
    """The archive could not be built (duplicate path, zip writer failure)"""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(message)


class BookConfigError(EpubError):
    """book.json is missing, unreadable or incomplete"""


class ParserNotFoundError(EpubError):
    """No site parser is registered for a URL"""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No parser found for {url}")


class ParserRegistrationError(EpubError):
    """A site parser was registered twice for the same host"""
