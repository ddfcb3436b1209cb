"""
Result models reported back to the host
"""

from typing import Any, List, Optional

from PIL import Image
from pydantic import Field

from densify.core.errors import BatchFailed, DensifyError, ImageReadError, size_class_name

from .base import BaseModel
from .entities import ImageGroup, ImageVariant, SourceImage, VariantState


def _error_type(error: Optional[BaseException]) -> str:
    return type(error).__name__ if error is not None else ""


class FailureRecord(BaseModel):
    """Flat failure description: what failed, where and why"""

    identifier: str = ""
    size_class: str = ""
    path: str = ""
    error_type: str
    message: str


class ManifestEntry(BaseModel):
    """One size class of a group after processing"""

    size_class: str
    scale_factor: float
    output_path: str
    supplied: bool
    state: VariantState
    width: Optional[int] = None
    height: Optional[int] = None
    error: str = ""
    error_type: str = ""
    image: Optional[Image.Image] = Field(default=None, exclude=True)
    source: Optional[SourceImage] = Field(default=None, exclude=True)

    @classmethod
    def from_variant(cls, variant: ImageVariant) -> "ManifestEntry":
        """Build an entry, decoding supplied images so every resolved entry has pixels

        A supplied image that cannot be decoded is reported as FAILED.
        """
        image: Optional[Image.Image] = None
        state = variant.state
        error: Optional[BaseException] = variant.error

        if variant.source is not None:
            try:
                image = variant.source.load()
            except ImageReadError as e:
                state = VariantState.FAILED
                error = e
        elif variant.state is VariantState.RESOLVED:
            image = variant.image

        return cls(
            size_class=size_class_name(variant.size_class),
            scale_factor=variant.scale_factor,
            output_path=str(variant.path) if variant.path is not None else "",
            supplied=variant.is_supplied,
            state=state,
            width=image.width if image is not None else None,
            height=image.height if image is not None else None,
            error=str(error) if error is not None else "",
            error_type=_error_type(error),
            image=image,
            source=variant.source,
        )

    @property
    def ok(self) -> bool:
        return self.state is VariantState.RESOLVED


class GroupResult(BaseModel):
    """Outcome of one logical identifier"""

    identifier: str
    success: bool
    error: str = ""
    error_type: str = ""
    error_size_class: str = ""
    error_path: str = ""
    entries: List[ManifestEntry] = Field(default_factory=list)

    @classmethod
    def from_group(cls, group: ImageGroup) -> "GroupResult":
        entries = [ManifestEntry.from_variant(variant) for variant in group.variants]
        size_class = getattr(group.error, "size_class", None)
        path = getattr(group.error, "path", None)
        return cls(
            identifier=group.identifier,
            success=not group.failed and all(entry.ok for entry in entries),
            error=str(group.error) if group.error is not None else "",
            error_type=_error_type(group.error),
            error_size_class=size_class_name(size_class) if size_class is not None else "",
            error_path=str(path) if path is not None else "",
            entries=entries,
        )

    def synthesized(self) -> List[ManifestEntry]:
        return [entry for entry in self.entries if not entry.supplied]

    def failures(self) -> List[FailureRecord]:
        if self.error_type:
            return [
                FailureRecord(
                    identifier=self.identifier,
                    size_class=self.error_size_class,
                    path=self.error_path,
                    error_type=self.error_type,
                    message=self.error,
                )
            ]
        return [
            FailureRecord(
                identifier=self.identifier,
                size_class=entry.size_class,
                path=entry.output_path,
                error_type=entry.error_type,
                message=entry.error,
            )
            for entry in self.entries
            if entry.state is VariantState.FAILED
        ]


class InputRejection(BaseModel):
    """An input the classifier could not place in any group"""

    path: str
    error_type: str
    error: str

    @classmethod
    def from_error(cls, path: Any, error: DensifyError) -> "InputRejection":
        return cls(path=str(path), error_type=_error_type(error), error=str(error))


class BatchResult(BaseModel):
    """Everything one pipeline run produced, in input order"""

    groups: List[GroupResult] = Field(default_factory=list)
    rejected: List[InputRejection] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected and all(group.success for group in self.groups)

    def failures(self) -> List[FailureRecord]:
        records = [
            FailureRecord(path=item.path, error_type=item.error_type, message=item.error)
            for item in self.rejected
        ]
        for group in self.groups:
            records.extend(group.failures())
        return records

    def output_paths(self) -> List[str]:
        """Paths of every resolved variant, supplied ones included"""
        return [
            entry.output_path
            for group in self.groups
            for entry in group.entries
            if entry.ok
        ]

    def get(self, identifier: str) -> Optional[GroupResult]:
        for group in self.groups:
            if group.identifier == identifier:
                return group
        return None

    def raise_for_errors(self):
        """Fail-fast hook for hosts that abort on any reported failure

        Raises:
            BatchFailed: carrying every FailureRecord
        """
        failures = self.failures()
        if failures:
            raise BatchFailed(failures)

