"""Data models for .properties file entries."""

from dataclasses import dataclass, field
from typing import Optional

from .decoder import ESCAPES

# Inverse of the decoder's escape table: character -> escape sequence
ENCODINGS = {char: "\\" + code for code, char in ESCAPES.items()}

# Characters that would end a key early or turn it into a comment
KEY_SPECIALS = frozenset("=: #!")


@dataclass
class PropertyEntry:
    """Represents a single key/value record in a .properties file.

    Attributes:
        key: The decoded property key.
        value: The decoded property value.
        line_number: Physical line the record started on, when parsed.
            Not part of equality.
    """
    key: str
    value: str = ""
    line_number: Optional[int] = field(default=None, compare=False)

    def to_properties_format(self, escape_unicode: bool = False) -> str:
        """Convert entry to a single .properties line.

        Args:
            escape_unicode: Write characters outside printable ASCII as
                \\uXXXX escapes instead of literally.

        Returns:
            ``key=value`` with both sides escaped.
        """
        escaped_key = self._escape(self.key, is_key=True, escape_unicode=escape_unicode)
        escaped_value = self._escape(self.value, escape_unicode=escape_unicode)
        return f"{escaped_key}={escaped_value}"

    @staticmethod
    def _escape(s: str, is_key: bool = False, escape_unicode: bool = False) -> str:
        """Escape special characters for .properties format."""
        result = []
        for i, char in enumerate(s):
            if char in ENCODINGS:
                result.append(ENCODINGS[char])
            elif is_key and char in KEY_SPECIALS:
                result.append("\\" + char)
            elif char == " " and i == 0:
                # Leading whitespace of a value is dropped on parse
                result.append("\\ ")
            elif escape_unicode and not " " <= char <= "~":
                result.append(_unicode_escape(char))
            else:
                result.append(char)
        return "".join(result)


def _unicode_escape(char: str) -> str:
    """Write one character as \\uXXXX, using a surrogate pair above U+FFFF."""
    units = char.encode("utf-16-be", "surrogatepass")
    return "".join(
        f"\\u{units[i]:02X}{units[i + 1]:02X}" for i in range(0, len(units), 2)
    )


PropertyList = list[PropertyEntry]
