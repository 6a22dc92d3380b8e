"""
Schema Location

Points at a place in a schema document: the file, the top-level
definition and, optionally, one of its properties.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SchemaLocation:
    """
    Location of a schema entry.

    Immutable (frozen) for hashability. Any part may be missing, e.g. a
    definition built in memory has no file.
    """
    file: Optional[str] = None
    definition: Optional[str] = None
    property: Optional[str] = None

    def __str__(self) -> str:
        """Format as file#Definition.property"""
        entry = self.definition or ""
        if self.property:
            entry = f"{entry}.{self.property}"
        if self.file and entry:
            return f"{self.file}#{entry}"
        return self.file or entry or "<unknown location>"

    def with_property(self, name: str) -> "SchemaLocation":
        return SchemaLocation(file=self.file, definition=self.definition, property=name)
