"""
Scale table
Fixed mapping from size class to scale factor and naming marker, relative to a baseline class
"""

from enum import Enum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Sequence

from densify.core.errors import InvalidSizeClass
from densify.core.logger import get_logger
from densify.core.markers import normalize_marker, parse_output_formats

logger = get_logger(__name__)


class ScaleEntry(NamedTuple):
    """One row of a scale table"""

    size_class: Enum
    factor: float
    marker: str


class ScaleTable:
    """
    Immutable, ordered size class table

    Lookups are total over the classes it was built with; anything else
    (including a platform's NONE member) raises InvalidSizeClass.
    """

    def __init__(self, entries: Iterable[ScaleEntry]):
        rows = tuple(ScaleEntry(*entry) for entry in entries)
        if not rows:
            raise ValueError("Scale table needs at least one entry")

        by_class: Dict[Enum, ScaleEntry] = {}
        by_marker: Dict[str, ScaleEntry] = {}
        for row in rows:
            if row.factor <= 0:
                raise ValueError(
                    f"Scale factor for {row.size_class} must be positive, got {row.factor}"
                )
            marker = normalize_marker(row.marker)
            if row.size_class in by_class:
                raise ValueError(f"Size class {row.size_class} listed twice")
            if marker in by_marker:
                raise ValueError(f"Marker '{marker}' listed twice")
            by_class[row.size_class] = row
            by_marker[marker] = row

        self._entries = rows
        self._by_class = by_class
        self._by_marker = by_marker

    def entry(self, size_class: Optional[Enum]) -> ScaleEntry:
        try:
            return self._by_class[size_class]  # type: ignore[index]
        except (KeyError, TypeError):
            raise InvalidSizeClass(size_class) from None

    def factor(self, size_class: Optional[Enum]) -> float:
        """Scale factor of a size class relative to the baseline"""
        return self.entry(size_class).factor

    def marker(self, size_class: Optional[Enum]) -> str:
        """Naming marker of a size class (e.g. 'hdpi')"""
        return self.entry(size_class).marker

    def from_marker(self, marker: str) -> Enum:
        """Size class for a marker, case-insensitive"""
        row = self._by_marker.get(normalize_marker(marker))
        if row is None:
            raise InvalidSizeClass(marker)
        return row.size_class

    def classes(self) -> List[Enum]:
        """All size classes in table order"""
        return [row.size_class for row in self._entries]

    def targets(self, allow: Optional[Sequence[str]] = None) -> List[Enum]:
        """Size classes eligible for synthesis

        Args:
            allow: Allow-list of markers. Empty or None means every class.

        Returns:
            Matching size classes in table order
        """
        markers = parse_output_formats(allow)
        if not markers:
            return self.classes()

        unknown = [marker for marker in markers if marker not in self._by_marker]
        if unknown:
            logger.warning(f"Ignoring unknown output formats: {', '.join(unknown)}")

        return [
            row.size_class
            for row in self._entries
            if normalize_marker(row.marker) in markers
        ]

    def __contains__(self, size_class: object) -> bool:
        try:
            return size_class in self._by_class
        except TypeError:
            return False

    def __iter__(self) -> Iterator[ScaleEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        rows = ", ".join(f"{row.marker}={row.factor:g}" for row in self._entries)
        return f"ScaleTable({rows})"
