"""Configuration for reading and writing .properties files."""

from dataclasses import dataclass
from typing import Optional


DEFAULT_ENCODING = "utf-8"

# java.util.Properties.load(InputStream) assumes ISO-8859-1
JAVA_ENCODING = "iso-8859-1"


@dataclass
class PropertiesConfig:
    """Configuration for the properties parser and serializer.

    Attributes:
        escape_unicode: Write non-ASCII characters as \\uXXXX escapes.
        encoding: Encoding used to read and write files.
        fallback_encoding: Encoding tried when a file does not decode
            with ``encoding``.
        header: Default comment written at the top of files.
    """
    escape_unicode: bool = False
    encoding: str = DEFAULT_ENCODING
    fallback_encoding: Optional[str] = JAVA_ENCODING
    header: Optional[str] = None

    @classmethod
    def java_legacy(cls, header: Optional[str] = None) -> "PropertiesConfig":
        """Configuration producing files readable by java.util.Properties.

        Args:
            header: Optional header comment.

        Returns:
            ISO-8859-1 configuration with unicode escaping enabled.
        """
        return cls(
            escape_unicode=True,
            encoding=JAVA_ENCODING,
            fallback_encoding=None,
            header=header
        )
