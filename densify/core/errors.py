"""
Error taxonomy for the variant pipeline

Every error carries whatever context is known (identifier, size class, path) so
a host can report it without parsing messages.
"""

from pathlib import Path
from typing import Any, Iterable, List, Optional, Union


def size_class_name(size_class: Any) -> str:
    """Printable name of a size class (enum member name, or repr for anything else)"""
    if size_class is None:
        return "None"
    return getattr(size_class, "name", None) or str(size_class)


class DensifyError(Exception):
    """Base class for all pipeline errors"""

    def __init__(
        self,
        message: str,
        identifier: Optional[str] = None,
        size_class: Any = None,
        path: Optional[Union[str, Path]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.identifier = identifier
        self.size_class = size_class
        self.path = Path(path) if path is not None else None


class ClassificationError(DensifyError):
    """Provenance carries no recognized size-class marker"""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"No size class for {path}: {reason}", path=path)
        self.reason = reason


class StructureError(DensifyError):
    """Logical identifier cannot be derived from the provenance"""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(f"Invalid structure for {path}: {reason}", path=path)
        self.reason = reason


class DuplicateVariant(DensifyError):
    """Two supplied images map to the same identifier and size class"""

    def __init__(self, identifier: str, size_class: Any, path: Optional[Union[str, Path]] = None):
        super().__init__(
            f"Duplicate {size_class_name(size_class)} image for {identifier}"
            + (f" ({path})" if path is not None else ""),
            identifier=identifier,
            size_class=size_class,
            path=path,
        )


class NoReferenceAvailable(DensifyError):
    """Group has no supplied image to resample from"""

    def __init__(self, identifier: str):
        super().__init__(f"No reference image to resize for {identifier}", identifier=identifier)


class RootResolutionError(DensifyError):
    """Output base directory cannot be derived from a supplied image"""

    def __init__(self, identifier: Optional[str], path: Union[str, Path], reason: str = ""):
        super().__init__(
            f"Cannot determine root folder from {path}" + (f": {reason}" if reason else ""),
            identifier=identifier,
            path=path,
        )


class InvalidSizeClass(DensifyError):
    """Size class missing from the scale table (configuration error)"""

    def __init__(self, size_class: Any):
        super().__init__(
            f"Size class {size_class_name(size_class)} has no scale factor",
            size_class=size_class,
        )


class DegenerateTargetSize(DensifyError):
    """Rounded target dimensions are not positive"""

    def __init__(self, identifier: str, size_class: Any, width: int, height: int):
        super().__init__(
            f"Target size {width}x{height} for {identifier} "
            f"({size_class_name(size_class)}) is degenerate",
            identifier=identifier,
            size_class=size_class,
        )
        self.width = width
        self.height = height


class ImageReadError(DensifyError):
    """Source image cannot be opened or decoded"""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        super().__init__(f"Cannot read image {path}: {cause}", path=path)


class ImageWriteError(DensifyError):
    """Resampled image cannot be written"""

    def __init__(
        self,
        path: Union[str, Path],
        cause: BaseException,
        identifier: Optional[str] = None,
        size_class: Any = None,
    ):
        super().__init__(
            f"Cannot write image {path}: {cause}",
            identifier=identifier,
            size_class=size_class,
            path=path,
        )


class VariantStateError(DensifyError):
    """Illegal variant state transition"""


class BatchFailed(DensifyError):
    """Raised by fail-fast hosts when a batch reported any failure"""

    def __init__(self, failures: Iterable[Any]):
        self.failures: List[Any] = list(failures)
        super().__init__(f"{len(self.failures)} failure(s) in batch")
