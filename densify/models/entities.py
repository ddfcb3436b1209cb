"""
Pipeline entity models
Source images, size variants and the groups that own them
"""

import threading
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Tuple, Union

from PIL import Image
from pydantic import Field, model_validator

from densify.core.errors import (
    DensifyError,
    DuplicateVariant,
    ImageReadError,
    VariantStateError,
    size_class_name,
)

from .base import BaseModel

if TYPE_CHECKING:
    from densify.processing.scale_table import ScaleTable


class SourceImage:
    """
    A supplied image: provenance path plus decoded or lazily decoded pixels

    Decoding happens at most once; concurrent callers share the same buffer,
    which must be treated as read-only.
    """

    def __init__(self, path: Union[str, Path], image: Optional[Image.Image] = None):
        self.path = Path(path)
        self._image = image
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._image is not None

    def load(self) -> Image.Image:
        """Decode the image from disk if needed

        Raises:
            ImageReadError: if the file is missing, not a readable image or
                above Pillow's pixel limit
        """
        with self._lock:
            if self._image is None:
                try:
                    with Image.open(self.path) as img:
                        img.load()
                        self._image = img.copy()
                except (OSError, Image.DecompressionBombError) as e:
                    raise ImageReadError(self.path, e) from e
            return self._image

    @property
    def size(self) -> Tuple[int, int]:
        return self.load().size

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "lazy"
        return f"SourceImage({str(self.path)!r}, {state})"


class VariantState(str, Enum):
    """Lifecycle of a size variant"""

    UNRESOLVED = "unresolved"
    SYNTHESIZING = "synthesizing"
    RESOLVED = "resolved"
    FAILED = "failed"


class ImageVariant(BaseModel):
    """One size class slot of a group

    The scale factor is copied from the scale table when the variant is
    created and cannot be reassigned. Use `supplied()` or `placeholder()`.
    """

    size_class: Any
    scale_factor: float = Field(frozen=True)
    source: Optional[SourceImage] = None
    output_path: Optional[Path] = None
    state: VariantState = VariantState.UNRESOLVED
    image: Optional[Image.Image] = Field(default=None, exclude=True)
    error: Optional[Exception] = Field(default=None, exclude=True)

    @model_validator(mode="after")
    def _check_backing(self) -> "ImageVariant":
        if self.source is None and self.output_path is None:
            raise ValueError(
                f"{size_class_name(self.size_class)} variant needs a source or an output path"
            )
        return self

    @classmethod
    def supplied(
        cls, table: "ScaleTable", size_class: Enum, source: SourceImage
    ) -> "ImageVariant":
        """Variant backed by an input image, resolved from the start"""
        return cls(
            size_class=size_class,
            scale_factor=table.factor(size_class),
            source=source,
            state=VariantState.RESOLVED,
        )

    @classmethod
    def placeholder(
        cls, table: "ScaleTable", size_class: Enum, output_path: Union[str, Path]
    ) -> "ImageVariant":
        """Variant that still has to be synthesized into output_path"""
        return cls(
            size_class=size_class,
            scale_factor=table.factor(size_class),
            output_path=Path(output_path),
        )

    @property
    def is_supplied(self) -> bool:
        return self.source is not None

    @property
    def path(self) -> Optional[Path]:
        """Where this variant's pixels live (input file or output file)"""
        if self.source is not None:
            return self.source.path
        return self.output_path

    def begin(self):
        if self.state is not VariantState.UNRESOLVED:
            raise VariantStateError(
                f"Cannot synthesize {size_class_name(self.size_class)} variant in state {self.state.value}",
                size_class=self.size_class,
            )
        self.state = VariantState.SYNTHESIZING

    def resolve(self, image: Image.Image):
        if self.state is not VariantState.SYNTHESIZING:
            raise VariantStateError(
                f"Cannot resolve {size_class_name(self.size_class)} variant in state {self.state.value}",
                size_class=self.size_class,
            )
        self.image = image
        self.state = VariantState.RESOLVED

    def fail(self, error: Exception):
        if self.state in (VariantState.RESOLVED, VariantState.FAILED):
            raise VariantStateError(
                f"Cannot fail {size_class_name(self.size_class)} variant in state {self.state.value}",
                size_class=self.size_class,
            )
        self.error = error
        self.state = VariantState.FAILED


class ImageGroup(BaseModel):
    """All size variants sharing one logical identifier

    Size classes are unique within a group. A group with `error` set is
    failed as a whole and produces no output.
    """

    identifier: str
    variants: List[ImageVariant] = Field(default_factory=list)
    error: Optional[Exception] = Field(default=None, exclude=True)

    def size_classes(self) -> List[Any]:
        return [variant.size_class for variant in self.variants]

    def has_class(self, size_class: Any) -> bool:
        return any(variant.size_class == size_class for variant in self.variants)

    def get(self, size_class: Any) -> Optional[ImageVariant]:
        for variant in self.variants:
            if variant.size_class == size_class:
                return variant
        return None

    def add_supplied(self, variant: ImageVariant):
        """Add an input variant

        Raises:
            DuplicateVariant: if the group already holds this size class
        """
        if not variant.is_supplied:
            raise ValueError("add_supplied() needs a variant with a source")
        if self.has_class(variant.size_class):
            raise DuplicateVariant(self.identifier, variant.size_class, variant.path)
        self.variants.append(variant)

    def add_placeholder(self, variant: ImageVariant):
        if variant.is_supplied:
            raise ValueError("add_placeholder() needs a variant without a source")
        if self.has_class(variant.size_class):
            raise DuplicateVariant(self.identifier, variant.size_class)
        self.variants.append(variant)

    def supplied(self) -> List[ImageVariant]:
        return [variant for variant in self.variants if variant.is_supplied]

    def placeholders(self) -> List[ImageVariant]:
        return [variant for variant in self.variants if not variant.is_supplied]

    def by_scale_factor(self) -> List[ImageVariant]:
        """Variants ordered by scale factor, largest first, ties in insertion order"""
        return sorted(self.variants, key=lambda variant: variant.scale_factor, reverse=True)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def is_complete(self) -> bool:
        return not self.failed and all(
            variant.state is VariantState.RESOLVED for variant in self.variants
        )

    def fail(self, error: DensifyError):
        """Fail the whole group, marking every pending placeholder with the cause"""
        self.error = error
        for variant in self.variants:
            if variant.state in (VariantState.UNRESOLVED, VariantState.SYNTHESIZING):
                variant.fail(error)
