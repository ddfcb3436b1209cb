"""
iOS classifier
Scale comes from the `@2x` / `@3x` file-name marker; unmarked files are @1x
"""

from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional, Tuple, Union

from densify.classifiers.base import BaseSizeClassifier, Classification
from densify.core.errors import (
    ClassificationError,
    InvalidSizeClass,
    RootResolutionError,
    StructureError,
)
from densify.processing.scale_table import ScaleEntry, ScaleTable


class IosScale(Enum):
    NONE = "none"
    X1 = "1x"
    X2 = "2x"
    X3 = "3x"


IOS_SCALE_TABLE = ScaleTable(
    [
        ScaleEntry(IosScale.X1, 1.0, "1x"),
        ScaleEntry(IosScale.X2, 2.0, "2x"),
        ScaleEntry(IosScale.X3, 3.0, "3x"),
    ]
)

# Marker written without an @ suffix
BASE_MARKER = "1x"


def _split_name(stem: str) -> Tuple[str, str, str]:
    """Split 'icon@2x~ipad' into ('icon', '2x', '~ipad')"""
    core, tilde, device = stem.partition("~")
    if "@" in core:
        base, _, marker = core.rpartition("@")
    else:
        base, marker = core, BASE_MARKER
    return base, marker, f"{tilde}{device}"


class IosClassifier(BaseSizeClassifier):
    """Classifier for `name.png`, `name@2x.png`, `name@3x~ipad.png` images

    The identifier is the folder path plus the base name (device suffix kept),
    and synthesized variants are written into the same folder.
    """

    platform = "ios"

    def __init__(self, scale_table: Optional[ScaleTable] = None):
        super().__init__(scale_table or IOS_SCALE_TABLE)

    def classify(self, path: Union[str, Path]) -> Classification:
        path = Path(path)
        base, marker, device = _split_name(path.stem)

        if not base:
            raise StructureError(path, "file name has no base name before the scale marker")

        try:
            size_class = self.scale_table.from_marker(marker)
        except InvalidSizeClass:
            raise ClassificationError(path, f"unknown scale marker @{marker}") from None

        identifier = (PurePosixPath(path.parent.as_posix()) / f"{base}{device}").as_posix()
        return Classification(identifier, size_class)

    def resolve_root(self, path: Union[str, Path], identifier: str = "") -> Path:
        path = Path(path)
        if not path.name:
            raise RootResolutionError(identifier or None, path, "path has no file name")
        return path.parent

    def output_path(self, root: Path, identifier: str, size_class: Enum) -> Path:
        name = PurePosixPath(identifier).name
        base, tilde, device = name.partition("~")
        marker = self.scale_table.marker(size_class)
        suffix = "" if marker.lower() == BASE_MARKER else f"@{marker}"
        return Path(root) / f"{base}{suffix}{tilde}{device}.png"
