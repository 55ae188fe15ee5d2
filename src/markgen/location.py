"""Source location tracking for error messages.

Parsers attach a position to each node they emit. markgen never needs it to
generate output; it is carried through so errors can point at the source.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a node in the markup it was parsed from.

    All positions are 1-indexed.

    Attributes:
        lineno: Line number
        col_offset: Column offset
        source_file: Source file path (optional)

    Examples:
        >>> str(SourceLocation(3, 7))
        '3:7'
        >>> str(SourceLocation(3, 7, "views/index.sgr"))
        'views/index.sgr:3:7'

    """

    lineno: int
    col_offset: int
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.sgr:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SourceLocation:
        """Build a location from parser output.

        Accepts the ``line``/``col``/``filename`` keys that markup parsers
        emit as well as this class's own field names.
        """
        lineno = data.get("lineno", data.get("line", 0))
        col_offset = data.get("col_offset", data.get("col", 0))
        source_file = data.get("source_file", data.get("filename"))
        return cls(lineno=lineno, col_offset=col_offset, source_file=source_file)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the ``line``/``col`` shape parsers emit."""
        result: dict[str, Any] = {"line": self.lineno, "col": self.col_offset}
        if self.source_file:
            result["filename"] = self.source_file
        return result
