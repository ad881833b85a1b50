"""
Site parsers. Importing this package registers every shipped parser.
"""

from .factory import ParserFactory, parser_factory
from .parser import Parser, extract_url_from_background_image
from . import pawread  # noqa: F401

__all__ = [
    "Parser",
    "ParserFactory",
    "parser_factory",
    "extract_url_from_background_image",
]
