"""
Grouping engine
Partitions classified inputs into one ImageGroup per logical identifier
"""

from enum import Enum
from typing import Dict, Iterable, Tuple

from densify.core.errors import DuplicateVariant
from densify.core.logger import get_logger
from densify.models.entities import ImageGroup, ImageVariant, SourceImage

from .scale_table import ScaleTable

logger = get_logger(__name__)

ClassifiedImage = Tuple[str, Enum, SourceImage]


class GroupingEngine:
    """
    Groups (identifier, size class, source) triples

    Groups iterate in first-occurrence order. A second image for an existing
    (identifier, size class) pair fails that group with DuplicateVariant;
    the remaining groups are unaffected.
    """

    def __init__(self, scale_table: ScaleTable):
        self.scale_table = scale_table

    def group(self, images: Iterable[ClassifiedImage]) -> Dict[str, ImageGroup]:
        """
        Build groups from classified images

        Args:
            images: (identifier, size_class, source) triples in input order

        Returns:
            identifier -> ImageGroup, in first-occurrence order

        Raises:
            InvalidSizeClass: a size class is missing from the scale table
        """
        groups: Dict[str, ImageGroup] = {}

        for identifier, size_class, source in images:
            group = groups.get(identifier)
            if group is None:
                group = ImageGroup(identifier=identifier)
                groups[identifier] = group

            variant = ImageVariant.supplied(self.scale_table, size_class, source)

            if group.failed:
                continue

            try:
                group.add_supplied(variant)
            except DuplicateVariant as e:
                logger.error(str(e))
                group.fail(e)

        logger.debug(f"Grouped images into {len(groups)} group(s)")
        return groups
