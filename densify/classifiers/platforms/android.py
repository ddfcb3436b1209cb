"""
Android resource classifier
Density comes from the folder qualifier (drawable-hdpi, mipmap-xxhdpi, ...)
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

from densify.classifiers.base import BaseSizeClassifier, Classification
from densify.core.errors import ClassificationError, RootResolutionError, StructureError
from densify.processing.scale_table import ScaleEntry, ScaleTable


class AndroidDensity(Enum):
    NONE = "none"
    LDPI = "ldpi"  # 0.75 x mdpi
    MDPI = "mdpi"  # baseline
    TVDPI = "tvdpi"  # 1.33 x mdpi
    HDPI = "hdpi"  # 1.5 x mdpi
    XHDPI = "xhdpi"  # 2 x mdpi
    XXHDPI = "xxhdpi"  # 3 x mdpi
    XXXHDPI = "xxxhdpi"  # 4 x mdpi


ANDROID_SCALE_TABLE = ScaleTable(
    [
        ScaleEntry(AndroidDensity.LDPI, 0.75, "ldpi"),
        ScaleEntry(AndroidDensity.MDPI, 1.0, "mdpi"),
        ScaleEntry(AndroidDensity.TVDPI, 4 / 3, "tvdpi"),
        ScaleEntry(AndroidDensity.HDPI, 1.5, "hdpi"),
        ScaleEntry(AndroidDensity.XHDPI, 2.0, "xhdpi"),
        ScaleEntry(AndroidDensity.XXHDPI, 3.0, "xxhdpi"),
        ScaleEntry(AndroidDensity.XXXHDPI, 4.0, "xxxhdpi"),
    ]
)

RESOURCE_FOLDERS = ("drawable", "mipmap")


class AndroidClassifier(BaseSizeClassifier):
    """Classifier for `res/<drawable|mipmap>[-qualifiers]-<density>/<name>` images

    The identifier is `<folder without density>/<file stem>`, so
    `drawable-night-hdpi/icon.png` and `drawable-hdpi/icon.png` belong to
    different groups. Synthesized variants go next to the density folder of
    the group's first image, always as PNG.
    """

    platform = "android"

    def __init__(self, scale_table: Optional[ScaleTable] = None):
        super().__init__(scale_table or ANDROID_SCALE_TABLE)

    def _match_density(self, path: Path, directory: str) -> Tuple[Enum, str]:
        """Return (size class, folder without density suffix)"""
        lowered = directory.lower()
        for entry in self.scale_table:
            suffix = f"-{entry.marker.lower()}"
            if lowered.endswith(suffix):
                return entry.size_class, directory[: -len(suffix)]

        raise ClassificationError(path, f"no density qualifier in folder {directory}")

    def classify(self, path: Union[str, Path]) -> Classification:
        path = Path(path)
        directory = path.parent.name

        if not directory or not path.stem:
            raise StructureError(path, "image is not inside a resource folder")

        if not directory.startswith(RESOURCE_FOLDERS):
            raise StructureError(
                path, f"got folder {directory}, expected drawable or mipmap"
            )

        size_class, folder = self._match_density(path, directory)
        return Classification(f"{folder}/{path.stem}", size_class)

    def resolve_root(self, path: Union[str, Path], identifier: str = "") -> Path:
        path = Path(path)
        density_dir = path.parent
        if not density_dir.name:
            raise RootResolutionError(identifier or None, path, "image has no parent folder")
        return density_dir.parent

    def output_path(self, root: Path, identifier: str, size_class: Enum) -> Path:
        folder, _, name = identifier.partition("/")
        if not folder or not name:
            raise StructureError(identifier, "identifier must look like '<folder>/<name>'")

        marker = self.scale_table.marker(size_class)
        return Path(root) / f"{folder}-{marker}" / f"{name}.png"
