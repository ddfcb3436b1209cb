"""
Image resampler
Produces pixel data for every placeholder of a group from its reference image

Strategy:
- Reference = supplied variant with the highest scale factor (downscale when possible)
- Target size = (round(W * ratio), round(H * ratio)), ratio = target factor / reference factor
- Rounding is Python's round(): half-to-even, applied to width and height independently
- High quality bicubic (default) or LANCZOS kernel, reference DPI kept, PNG output
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image

from densify.core.errors import (
    DegenerateTargetSize,
    DensifyError,
    NoReferenceAvailable,
    size_class_name,
)
from densify.core.logger import get_logger
from densify.models.entities import ImageGroup, ImageVariant, VariantState

from .writer import PngWriter

logger = get_logger(__name__)

RESAMPLE_FILTERS = {
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

# Modes resized as-is; anything else (palette, bilevel, CMYK, ...) is converted first
RESIZABLE_MODES = ("L", "LA", "RGB", "RGBA", "I")


def scaled_size(width: int, height: int, ratio: float) -> Tuple[int, int]:
    """Target dimensions for a scale ratio, rounded half-to-even"""
    return round(width * ratio), round(height * ratio)


class ImageResampler:
    """
    Resamples a group's reference image into its placeholders

    Each placeholder fails on its own (degenerate size, write error); the
    reference is decoded once and shared read-only by the worker threads.
    """

    def __init__(
        self,
        resample: str = "bicubic",
        writer: Optional[PngWriter] = None,
        max_workers: int = 1,
    ):
        """
        Args:
            resample: Interpolation kernel, 'bicubic' or 'lanczos'
            writer: Output writer (defaults to an optimizing PngWriter)
            max_workers: Placeholders resampled in parallel within one group
        """
        key = resample.strip().lower()
        if key not in RESAMPLE_FILTERS:
            raise ValueError(
                f"Unsupported resample kernel: {resample}, expected one of "
                f"{', '.join(RESAMPLE_FILTERS)}"
            )
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.resample = key
        self.filter = RESAMPLE_FILTERS[key]
        self.writer = writer or PngWriter()
        self.max_workers = max_workers

        self._stats_lock = threading.Lock()
        self.stats = {
            "groups_processed": 0,
            "variants_resolved": 0,
            "variants_failed": 0,
        }

    @staticmethod
    def select_reference(group: ImageGroup) -> ImageVariant:
        """Supplied variant with the highest scale factor, first inserted on ties

        Raises:
            NoReferenceAvailable: the group has no supplied variant
        """
        for variant in group.by_scale_factor():
            if variant.is_supplied:
                return variant
        raise NoReferenceAvailable(group.identifier)

    @staticmethod
    def prepare(image: Image.Image) -> Image.Image:
        """Convert modes that cannot be interpolated (palette would fall back to nearest)"""
        if image.mode in RESIZABLE_MODES:
            return image

        has_alpha = "A" in image.getbands() or "transparency" in image.info
        converted = image.convert("RGBA" if has_alpha else "RGB")
        converted.info = dict(image.info)
        converted.info.pop("transparency", None)
        return converted

    def resize(self, image: Image.Image, size: Tuple[int, int]) -> Image.Image:
        """Resize with the configured kernel, keeping the DPI header"""
        resized = image.resize(size, self.filter)
        dpi = image.info.get("dpi")
        if dpi:
            resized.info["dpi"] = dpi
        return resized

    def resample_group(self, group: ImageGroup) -> List[ImageVariant]:
        """
        Synthesize every unresolved placeholder of a group

        Args:
            group: Group after variant synthesis

        Returns:
            The placeholders processed (each RESOLVED or FAILED)

        Raises:
            NoReferenceAvailable: the group has no supplied variant
            ImageReadError: the reference image cannot be decoded
        """
        pending = [
            variant
            for variant in group.placeholders()
            if variant.state is VariantState.UNRESOLVED
        ]
        if not pending:
            return []

        reference = self.select_reference(group)
        source_image = self.prepare(reference.source.load())  # type: ignore[union-attr]

        logger.debug(
            f"{group.identifier}: reference {size_class_name(reference.size_class)} "
            f"{source_image.width}x{source_image.height} for {len(pending)} variant(s)"
        )

        if self.max_workers > 1 and len(pending) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(pending))) as executor:
                list(
                    executor.map(
                        lambda variant: self._synthesize_variant(
                            group, reference, source_image, variant
                        ),
                        pending,
                    )
                )
        else:
            for variant in pending:
                self._synthesize_variant(group, reference, source_image, variant)

        with self._stats_lock:
            self.stats["groups_processed"] += 1
            for variant in pending:
                if variant.state is VariantState.RESOLVED:
                    self.stats["variants_resolved"] += 1
                else:
                    self.stats["variants_failed"] += 1

        return pending

    def _synthesize_variant(
        self,
        group: ImageGroup,
        reference: ImageVariant,
        source_image: Image.Image,
        variant: ImageVariant,
    ):
        """Resample one placeholder, recording failure on the variant"""
        variant.begin()
        label = f"{group.identifier} ({size_class_name(variant.size_class)})"

        try:
            ratio = variant.scale_factor / reference.scale_factor
            width, height = scaled_size(source_image.width, source_image.height, ratio)
            if width <= 0 or height <= 0:
                raise DegenerateTargetSize(group.identifier, variant.size_class, width, height)

            resized = self.resize(source_image, (width, height))
            logger.info(f"Creating image {variant.output_path} ({width}x{height})")
            self.writer.write(
                resized,
                variant.output_path,
                identifier=group.identifier,
                size_class=variant.size_class,
            )
        except DensifyError as e:
            logger.error(f"{label}: {e}")
            variant.fail(e)
            return
        except Exception as e:
            logger.error(f"{label}: resampling failed: {e}", exc_info=True)
            variant.fail(e)
            return

        variant.resolve(resized)

    def get_stats(self) -> Dict[str, Any]:
        """Get resampling statistics"""
        with self._stats_lock:
            return self.stats.copy()
