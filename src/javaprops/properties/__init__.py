"""Properties file parsing, serialization and models."""

from .errors import DanglingEscape, ErrorKind, MalformedUnicodeEscape, ParseError
from .models import PropertyEntry, PropertyList
from .parser import PropertiesParser, parse, serialize, to_dict

__all__ = [
    "DanglingEscape",
    "ErrorKind",
    "MalformedUnicodeEscape",
    "ParseError",
    "PropertiesParser",
    "PropertyEntry",
    "PropertyList",
    "parse",
    "serialize",
    "to_dict",
]
