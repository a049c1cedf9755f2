"""Line structure and escape decoding for .properties text.

Turns raw text into logical lines (comments and blanks dropped,
backslash continuations joined) and decodes backslash escapes on demand.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .errors import DanglingEscape, MalformedUnicodeEscape, ParseError

# Space, tab and form feed; nothing else counts as whitespace in the format
WHITESPACE = " \t\f"
COMMENT_CHARS = "#!"

# Single character escapes, shared with the serializer
ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "f": "\f",
    "\\": "\\",
}

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

EOL_PATTERN = re.compile(r"\r\n|\r|\n")
SURROGATE_PATTERN = re.compile("[\ud800-\udfff]")


def backslashes_before(text: str, index: int) -> int:
    """Count the run of backslashes immediately before ``index``."""
    count = 0
    while index > 0 and text[index - 1] == "\\":
        count += 1
        index -= 1
    return count


def is_escaped(text: str, index: int) -> bool:
    """Whether the character at ``index`` is escaped by a backslash.

    ``index == len(text)`` asks whether the text ends in an unpaired
    backslash.
    """
    return backslashes_before(text, index) % 2 == 1


def has_continuation(line: str) -> bool:
    """Whether a physical line continues onto the next one."""
    return is_escaped(line, len(line))


@dataclass
class LogicalLine:
    """One record's text after continuation lines have been joined.

    Attributes:
        text: The joined, still escaped, text.
        line_number: Physical line number where the record starts.
        segments: ``(offset, line_number, column)`` for each joined piece,
            mapping offsets in ``text`` back to physical positions.
    """
    text: str = ""
    line_number: int = 1
    segments: list[tuple[int, int, int]] = field(default_factory=list)

    def append(self, piece: str, line_number: int, column: int) -> None:
        self.segments.append((len(self.text), line_number, column))
        self.text += piece

    def locate(self, index: int) -> tuple[int, int]:
        """Map an offset in ``text`` to a physical (line, column)."""
        line, column = self.line_number, index + 1
        for offset, number, start_column in self.segments:
            if offset > index:
                break
            line, column = number, start_column + index - offset
        return line, column

    def decode(self, start: int = 0, end: Optional[int] = None) -> str:
        """Decode escapes in ``text[start:end]``.

        Raises:
            ParseError: Located at the physical line and column.
        """
        try:
            return decode_escapes(self.text, start, end)
        except ParseError as exc:
            line, column = self.locate(exc.column - 1)
            raise exc.at(line, column) from None


def logical_lines(content: str) -> Iterator[LogicalLine]:
    """Yield the logical lines of ``content`` in source order.

    Blank lines and comment lines are skipped. A line ending in an odd
    number of backslashes is joined with the next physical line, whose
    leading whitespace is dropped.
    """
    physical = EOL_PATTERN.split(content)
    index = 0

    while index < len(physical):
        raw = physical[index]
        index += 1
        line = raw.lstrip(WHITESPACE)

        if not line or line[0] in COMMENT_CHARS:
            continue

        logical = LogicalLine(line_number=index)
        column = len(raw) - len(line) + 1
        number = index

        while True:
            continued = has_continuation(line)
            if continued:
                line = line[:-1]
            logical.append(line, number, column)

            # A continuation at end of input joins an empty line
            if not continued or index >= len(physical):
                break

            raw = physical[index]
            index += 1
            number = index
            line = raw.lstrip(WHITESPACE)
            column = len(raw) - len(line) + 1

        if logical.text:
            yield logical


def decode_escapes(text: str, start: int = 0, end: Optional[int] = None) -> str:
    """Decode backslash escapes in ``text[start:end]``.

    Errors carry the 1-based column of the offending backslash within
    ``text``.

    Raises:
        MalformedUnicodeEscape: ``\\u`` without four hex digits.
        DanglingEscape: A backslash at the end of the range.
    """
    end = len(text) if end is None else end
    chars = []
    i = start

    while i < end:
        char = text[i]
        if char != "\\":
            chars.append(char)
            i += 1
            continue

        if i + 1 >= end:
            raise DanglingEscape("nothing follows the backslash", column=i + 1)

        escaped = text[i + 1]
        if escaped == "u":
            digits = text[i + 2:min(i + 6, end)]
            if len(digits) != 4 or not all(d in HEX_DIGITS for d in digits):
                raise MalformedUnicodeEscape(
                    f"'\\u{digits}' needs four hex digits",
                    column=i + 1
                )
            chars.append(chr(int(digits, 16)))
            i += 6
        else:
            chars.append(ESCAPES.get(escaped, escaped))
            i += 2

    return _join_surrogates("".join(chars))


def _join_surrogates(text: str) -> str:
    """Combine UTF-16 surrogate pairs produced by consecutive \\u escapes."""
    if not SURROGATE_PATTERN.search(text):
        return text
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
