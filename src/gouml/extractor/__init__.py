from .base import ParserAdapter, ParserRegistry
from .go_parser import GoParser, TypeRegistry

__all__ = [
    "GoParser",
    "ParserAdapter",
    "ParserRegistry",
    "TypeRegistry",
]
