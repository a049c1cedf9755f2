"""Change detection between two versions of a .properties file."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ..properties import PropertiesParser, PropertyEntry


class ChangeType(Enum):
    """Type of change detected in a .properties file."""
    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"


@dataclass
class PropertyChange:
    """Represents a change to a property.

    Attributes:
        key: The property key that changed.
        change_type: Type of change (added, modified, removed).
        old_value: Previous value (None for added entries).
        new_value: New value (None for removed entries).
    """
    key: str
    change_type: ChangeType
    old_value: Optional[str] = None
    new_value: Optional[str] = None


class DiffDetector:
    """Detects changes between two versions of a .properties file.

    Duplicate keys are resolved last-write-wins before comparing.
    """

    def __init__(self, parser: Optional[PropertiesParser] = None):
        """Initialize the detector.

        Args:
            parser: Parser used to read both versions.
        """
        self.parser = parser or PropertiesParser()

    def detect_changes(self, base_path: Path, head_path: Path) -> list[PropertyChange]:
        """Detect changes between two .properties files.

        A missing file is treated as empty.

        Args:
            base_path: Path to the old version.
            head_path: Path to the new version.

        Returns:
            List of PropertyChange objects describing the changes.
        """
        base_entries = self._load(base_path)
        head_entries = self._load(head_path)
        return self._compare_entries(base_entries, head_entries)

    def detect_changes_from_text(self, base: str, head: str) -> list[PropertyChange]:
        """Detect changes between two .properties texts.

        Args:
            base: Content of the old version.
            head: Content of the new version.

        Returns:
            List of PropertyChange objects describing the changes.
        """
        return self._compare_entries(
            self.parser.parse_to_dict(base),
            self.parser.parse_to_dict(head)
        )

    def _load(self, path: Path) -> dict[str, PropertyEntry]:
        if not path.exists():
            return {}
        return {e.key: e for e in self.parser.parse_file(path)}

    def _compare_entries(
        self,
        base: dict[str, PropertyEntry],
        head: dict[str, PropertyEntry]
    ) -> list[PropertyChange]:
        """Compare two sets of entries and return changes.

        Added and modified keys come first in head order, then removed
        keys in base order.

        Args:
            base: Dictionary of entries in the old version.
            head: Dictionary of entries in the new version.

        Returns:
            List of PropertyChange objects.
        """
        changes = []

        for key, entry in head.items():
            if key not in base:
                changes.append(PropertyChange(
                    key=key,
                    change_type=ChangeType.ADDED,
                    new_value=entry.value
                ))
            elif base[key].value != entry.value:
                changes.append(PropertyChange(
                    key=key,
                    change_type=ChangeType.MODIFIED,
                    old_value=base[key].value,
                    new_value=entry.value
                ))

        for key, entry in base.items():
            if key not in head:
                changes.append(PropertyChange(
                    key=key,
                    change_type=ChangeType.REMOVED,
                    old_value=entry.value
                ))

        return changes
