"""
Variant pipeline
inputs -> classifier -> grouping -> synthesis -> resampling -> per-group results

The pipeline never raises for per-input or per-group failures; they are
reported in the BatchResult and the host decides whether to stop the build
(BatchResult.raise_for_errors) or carry on.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple, Union

from PIL import Image

from densify.core.errors import (
    ClassificationError,
    ImageReadError,
    NoReferenceAvailable,
    RootResolutionError,
    StructureError,
)
from densify.core.logger import get_logger
from densify.models.entities import ImageGroup, SourceImage
from densify.models.responses import BatchResult, GroupResult, InputRejection

from .grouping import ClassifiedImage, GroupingEngine
from .image.resampler import ImageResampler
from .image.writer import PngWriter
from .scale_table import ScaleTable
from .synthesis import VariantSynthesizer

if TYPE_CHECKING:
    from densify.classifiers.base import BaseSizeClassifier

logger = get_logger(__name__)

PipelineInput = Union[
    str, Path, SourceImage, Tuple[Union[str, Path], Optional[Image.Image]]
]

# Errors that fail a whole group but leave the rest of the batch running
GROUP_ERRORS = (NoReferenceAvailable, RootResolutionError, StructureError, ImageReadError)


def to_source(item: PipelineInput) -> SourceImage:
    """Normalize a pipeline input into a SourceImage"""
    if isinstance(item, SourceImage):
        return item
    if isinstance(item, tuple):
        path, image = item
        return SourceImage(path, image)
    return SourceImage(item)


class ResizePipeline:
    """
    Produces every missing size variant of a batch of images

    Groups are processed concurrently; manifests keep input order.
    """

    def __init__(
        self,
        classifier: Optional["BaseSizeClassifier"] = None,
        scale_table: Optional[ScaleTable] = None,
        output_formats: Optional[Sequence[str]] = None,
        resample: str = "bicubic",
        max_workers: int = 4,
        variant_workers: int = 2,
        writer: Optional[PngWriter] = None,
    ):
        """
        Args:
            classifier: Size classifier (defaults to the Android classifier)
            scale_table: Scale table override (defaults to the classifier's)
            output_formats: Allow-list of markers to synthesize; empty means all
            resample: Interpolation kernel, 'bicubic' or 'lanczos'
            max_workers: Groups processed in parallel
            variant_workers: Placeholders resampled in parallel within a group
            writer: Output writer
        """
        if classifier is None:
            from densify.classifiers.factory import create_classifier

            classifier = create_classifier("android", scale_table)

        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.classifier = classifier
        self.scale_table = scale_table or classifier.scale_table
        self.max_workers = max_workers

        self.grouping = GroupingEngine(self.scale_table)
        self.synthesizer = VariantSynthesizer(classifier, self.scale_table, output_formats)
        self.resampler = ImageResampler(
            resample=resample, writer=writer, max_workers=variant_workers
        )

        logger.debug(
            f"ResizePipeline initialized: platform={classifier.platform or type(classifier).__name__}, "
            f"table={self.scale_table}, output_formats={self.synthesizer.output_formats or 'all'}, "
            f"resample={self.resampler.resample}, workers={max_workers}/{variant_workers}"
        )

    def classify(
        self, inputs: Iterable[PipelineInput]
    ) -> Tuple[List[ClassifiedImage], List[InputRejection]]:
        """Classify inputs, rejecting the ones the classifier cannot place"""
        classified: List[ClassifiedImage] = []
        rejected: List[InputRejection] = []

        for item in inputs:
            source = to_source(item)
            try:
                identifier, size_class = self.classifier.classify(source.path)
            except (ClassificationError, StructureError) as e:
                logger.error(str(e))
                rejected.append(InputRejection.from_error(source.path, e))
                continue
            classified.append((identifier, size_class, source))

        return classified, rejected

    def process_group(self, group: ImageGroup) -> GroupResult:
        """Synthesize and resample one group"""
        if not group.failed:
            try:
                self.synthesizer.synthesize(group)
                self.resampler.resample_group(group)
            except GROUP_ERRORS as e:
                logger.error(f"{group.identifier}: {e}")
                group.fail(e)

        result = GroupResult.from_group(group)
        if result.success:
            logger.debug(
                f"{group.identifier}: {len(result.synthesized())} variant(s) synthesized"
            )
        return result

    def run(self, inputs: Iterable[PipelineInput]) -> BatchResult:
        """
        Run the pipeline over a batch

        Args:
            inputs: Paths, (path, image) pairs or SourceImage objects

        Returns:
            BatchResult with one GroupResult per identifier, in input order

        Raises:
            InvalidSizeClass: the classifier produced a class the scale table lacks
        """
        classified, rejected = self.classify(inputs)
        groups = list(self.grouping.group(classified).values())

        if not groups:
            logger.debug("No images to process")
            return BatchResult(rejected=rejected)

        if self.max_workers > 1 and len(groups) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(groups))) as executor:
                results = list(executor.map(self.process_group, groups))
        else:
            results = [self.process_group(group) for group in groups]

        batch = BatchResult(groups=results, rejected=rejected)
        failures = batch.failures()
        logger.info(
            f"Processed {len(results)} group(s): "
            f"{sum(len(result.synthesized()) for result in results)} variant(s), "
            f"{len(failures)} failure(s)"
        )
        return batch


def get_resize_pipeline(**overrides) -> ResizePipeline:
    """Build a pipeline from the [resize] configuration

    Args:
        **overrides: ResizeConfig fields taking precedence over the config file
    """
    from densify.classifiers.factory import create_classifier
    from densify.core.settings import get_settings

    config = get_settings().get_resize_config(**overrides)
    writer = PngWriter(optimize=config.optimize)

    return ResizePipeline(
        classifier=create_classifier(config.platform),
        output_formats=config.output_formats,
        resample=config.resample,
        max_workers=config.max_workers,
        variant_workers=config.variant_workers,
        writer=writer,
    )
