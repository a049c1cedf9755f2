"""Parser and serializer for Java .properties files."""

import codecs
import logging
from pathlib import Path
from typing import Iterable, Optional

from ..config import PropertiesConfig
from .decoder import WHITESPACE, LogicalLine, is_escaped, logical_lines
from .models import PropertyEntry

logger = logging.getLogger(__name__)

SEPARATORS = "=:"


def find_separator(text: str) -> tuple[int, int]:
    """Find where the key ends and the value starts in a logical line.

    The first unescaped ``=``, ``:`` or whitespace wins. A whitespace
    separator also swallows one ``=`` or ``:`` that follows it, and
    whitespace after the separator belongs to neither side.

    Args:
        text: Escaped logical line text, leading whitespace already removed.

    Returns:
        ``(key_end, value_start)`` offsets into ``text``.
    """
    for i, char in enumerate(text):
        if (char in SEPARATORS or char in WHITESPACE) and not is_escaped(text, i):
            break
    else:
        return len(text), len(text)

    j = i + 1
    if char in WHITESPACE:
        j = _skip_whitespace(text, j)
        if j < len(text) and text[j] in SEPARATORS:
            j += 1
    return i, _skip_whitespace(text, j)


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in WHITESPACE:
        index += 1
    return index


def split_entry(line: LogicalLine) -> PropertyEntry:
    """Split a logical line into a decoded PropertyEntry."""
    key_end, value_start = find_separator(line.text)
    return PropertyEntry(
        key=line.decode(0, key_end),
        value=line.decode(value_start),
        line_number=line.line_number
    )


def parse(content: str) -> list[PropertyEntry]:
    """Parse .properties text into entries in source order.

    Args:
        content: The full text of a .properties file.

    Returns:
        List of PropertyEntry objects, duplicates included.

    Raises:
        ParseError: On a malformed escape; nothing is returned.
    """
    return [split_entry(line) for line in logical_lines(content)]


def serialize(
    entries: Iterable[PropertyEntry],
    escape_unicode: bool = False,
    header: Optional[str] = None
) -> str:
    """Write entries as .properties text, one line per entry.

    Args:
        entries: Entries to write, in order.
        escape_unicode: Write non-ASCII characters as \\uXXXX escapes.
        header: Optional comment placed before the entries.

    Returns:
        The text, ending in a newline unless empty.
    """
    lines = []
    if header is not None:
        lines.extend(f"# {line}".rstrip() for line in header.splitlines())

    lines.extend(entry.to_properties_format(escape_unicode) for entry in entries)

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def to_dict(entries: Iterable[PropertyEntry]) -> dict[str, str]:
    """Collapse entries into a mapping; the last duplicate wins."""
    return {entry.key: entry.value for entry in entries}


class PropertiesParser:
    """Parser for Java .properties files.

    Reads UTF-8 (falling back to ISO-8859-1) and handles comments,
    line continuations and escape sequences.
    """

    def __init__(self, config: Optional[PropertiesConfig] = None):
        """Initialize the parser.

        Args:
            config: Serialization and file encoding options.
        """
        self.config = config or PropertiesConfig()

    def parse(self, content: str) -> list[PropertyEntry]:
        """Parse .properties content into PropertyEntry objects.

        Args:
            content: The content of a .properties file.

        Returns:
            List of PropertyEntry objects.
        """
        entries = parse(content)
        logger.debug("Parsed %d entries", len(entries))
        return entries

    def parse_file(self, path: Path) -> list[PropertyEntry]:
        """Parse a .properties file.

        Args:
            path: Path to the .properties file.

        Returns:
            List of PropertyEntry objects.
        """
        content = self._read_file(path)
        logger.debug("Parsing %s", path)
        return self.parse(content)

    def parse_to_dict(self, content: str) -> dict[str, PropertyEntry]:
        """Parse .properties content into a dictionary keyed by property key.

        Later duplicates replace earlier ones.

        Args:
            content: The content of a .properties file.

        Returns:
            Dictionary mapping keys to PropertyEntry objects.
        """
        entries = self.parse(content)
        return {entry.key: entry for entry in entries}

    def _read_file(self, path: Path) -> str:
        """Read a .properties file, falling back to the legacy encoding.

        Args:
            path: Path to the file.

        Returns:
            File content as string.
        """
        raw = path.read_bytes()

        encoding = self.config.encoding
        # Drop a UTF-8 byte order mark
        if codecs.lookup(encoding).name == "utf-8":
            encoding = "utf-8-sig"

        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            if not self.config.fallback_encoding:
                raise
            logger.warning(
                "%s is not valid %s, reading as %s",
                path, self.config.encoding, self.config.fallback_encoding
            )
            return raw.decode(self.config.fallback_encoding)

    def write(
        self,
        entries: list[PropertyEntry],
        path: Path,
        header: Optional[str] = None
    ) -> None:
        """Write PropertyEntry objects to a .properties file.

        Args:
            entries: List of PropertyEntry objects to write.
            path: Path to the output file.
            header: Comment for the top of the file; defaults to the
                configured header.
        """
        content = self.format(entries, header=header)

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        path.write_bytes(content.encode(self.config.encoding))
        logger.info("Wrote %d entries to %s", len(entries), path)

    def format(self, entries: list[PropertyEntry], header: Optional[str] = None) -> str:
        """Format PropertyEntry objects as .properties content.

        Args:
            entries: List of PropertyEntry objects.
            header: Comment for the top of the output; defaults to the
                configured header.

        Returns:
            Formatted .properties content.
        """
        return serialize(
            entries,
            escape_unicode=self.config.escape_unicode,
            header=header if header is not None else self.config.header
        )

    def update_entries(
        self,
        existing: list[PropertyEntry],
        updates: dict[str, str],
        removals: Optional[set[str]] = None
    ) -> list[PropertyEntry]:
        """Update existing entries with new values.

        Every occurrence of an updated key gets the new value, in place.

        Args:
            existing: List of existing PropertyEntry objects.
            updates: Dictionary of key -> new value updates.
            removals: Set of keys to remove.

        Returns:
            Updated list of PropertyEntry objects.
        """
        removals = removals or set()
        result = []
        existing_keys = set()

        # Update existing entries
        for entry in existing:
            if entry.key in removals:
                continue
            existing_keys.add(entry.key)
            if entry.key in updates:
                result.append(PropertyEntry(
                    key=entry.key,
                    value=updates[entry.key],
                    line_number=entry.line_number
                ))
            else:
                result.append(entry)

        # Add new entries (keys that weren't in existing)
        for key, value in updates.items():
            if key not in existing_keys and key not in removals:
                result.append(PropertyEntry(key=key, value=value))

        return result
