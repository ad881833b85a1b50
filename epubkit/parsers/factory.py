"""
Registry of site parsers, keyed by host name
"""

from typing import Callable, Dict, List
from urllib.parse import urlparse

from ..exceptions import ParserNotFoundError, ParserRegistrationError
from .parser import Parser


def _host_of(url: str) -> str:
    host = urlparse(url).hostname if "://" in url else url
    host = (host or "").lower()
    if host.startswith("www."):
        host = host[4:]
    return host


class ParserFactory:
    """Creates the parser for a URL's site"""

    def __init__(self):
        self._constructors: Dict[str, Callable[[], Parser]] = {}

    def register(self, host: str, constructor: Callable[[], Parser]):
        host = _host_of(host)
        if host in self._constructors:
            raise ParserRegistrationError(f"Parser for {host} already registered")
        self._constructors[host] = constructor

    def fetch(self, url: str) -> Parser:
        """Return a new parser for `url` (or a bare host name)"""
        constructor = self._constructors.get(_host_of(url))
        if constructor is None:
            raise ParserNotFoundError(url)
        return constructor()

    @property
    def hosts(self) -> List[str]:
        return sorted(self._constructors)


parser_factory = ParserFactory()
