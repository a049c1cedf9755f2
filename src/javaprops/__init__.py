"""Parser and serializer for Java .properties files."""

from .config import PropertiesConfig
from .properties import (
    DanglingEscape,
    ErrorKind,
    MalformedUnicodeEscape,
    ParseError,
    PropertiesParser,
    PropertyEntry,
    parse,
    serialize,
    to_dict,
)

__version__ = "0.1.0"

__all__ = [
    "DanglingEscape",
    "ErrorKind",
    "MalformedUnicodeEscape",
    "ParseError",
    "PropertiesConfig",
    "PropertiesParser",
    "PropertyEntry",
    "parse",
    "serialize",
    "to_dict",
]
