"""
Variant synthesizer
Adds a placeholder variant for every size class a group is missing
"""

from typing import TYPE_CHECKING, List, Optional, Sequence

from densify.core.errors import NoReferenceAvailable
from densify.core.logger import get_logger
from densify.core.markers import parse_output_formats
from densify.models.entities import ImageGroup, ImageVariant

from .scale_table import ScaleTable

if TYPE_CHECKING:
    from densify.classifiers.base import BaseSizeClassifier

logger = get_logger(__name__)


class VariantSynthesizer:
    """Fills the size-class gaps of a group with placeholders

    The allow-list only limits which classes are synthesized; supplied
    variants outside it stay in the group.
    """

    def __init__(
        self,
        classifier: "BaseSizeClassifier",
        scale_table: Optional[ScaleTable] = None,
        output_formats: Optional[Sequence[str]] = None,
    ):
        self.classifier = classifier
        self.scale_table = scale_table or classifier.scale_table
        self.output_formats = parse_output_formats(output_formats)

    def synthesize(self, group: ImageGroup) -> List[ImageVariant]:
        """
        Append placeholders for missing size classes

        Args:
            group: Group with at least one supplied variant

        Returns:
            The placeholders that were added, in scale table order

        Raises:
            NoReferenceAvailable: the group has no supplied variant
            RootResolutionError: no output root can be derived from the first supplied image
        """
        supplied = group.supplied()
        if not supplied:
            raise NoReferenceAvailable(group.identifier)

        first = supplied[0]
        root = self.classifier.resolve_root(first.path, group.identifier)

        added: List[ImageVariant] = []
        for size_class in self.scale_table.targets(self.output_formats):
            if group.has_class(size_class):
                continue

            output_path = self.classifier.output_path(root, group.identifier, size_class)
            placeholder = ImageVariant.placeholder(self.scale_table, size_class, output_path)
            group.add_placeholder(placeholder)
            added.append(placeholder)

        logger.debug(
            f"{group.identifier}: {len(supplied)} supplied, {len(added)} to synthesize"
        )
        return added
