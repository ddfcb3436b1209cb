"""
Size-class marker helpers
"""

from typing import Iterable, List, Union


def normalize_marker(marker: str) -> str:
    """Lower-case a marker and drop surrounding whitespace and a leading '-'"""
    return marker.strip().lstrip("-").strip().lower()


def parse_output_formats(value: Union[None, str, Iterable[str]]) -> List[str]:
    """Parse an allow-list of markers

    Accepts a comma separated string ("ldpi,mdpi,hdpi") or any iterable of markers.

    Returns:
        Normalized markers in the given order, duplicates and blanks removed
    """
    if value is None:
        return []

    if isinstance(value, str):
        items: Iterable[str] = value.split(",")
    else:
        items = value

    markers: List[str] = []
    for item in items:
        marker = normalize_marker(str(item))
        if marker and marker not in markers:
            markers.append(marker)
    return markers
