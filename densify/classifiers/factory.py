"""
Classifier factory
Creates the platform-specific classifier for a configured platform key

Callers only depend on BaseSizeClassifier; adding a platform means adding an
implementation under platforms/ and registering it here.
"""

from typing import Dict, List, Optional, Type

from densify.core.logger import get_logger
from densify.processing.scale_table import ScaleTable

from .base import BaseSizeClassifier
from .platforms import AndroidClassifier, IosClassifier

logger = get_logger(__name__)


class ClassifierFactory:
    """Size classifier factory class"""

    _registry: Dict[str, Type[BaseSizeClassifier]] = {
        AndroidClassifier.platform: AndroidClassifier,
        IosClassifier.platform: IosClassifier,
    }

    @staticmethod
    def platforms() -> List[str]:
        """Registered platform keys"""
        return sorted(ClassifierFactory._registry)

    @staticmethod
    def create_classifier(
        platform: str = "android", scale_table: Optional[ScaleTable] = None
    ) -> BaseSizeClassifier:
        """Create a size classifier

        Args:
            platform: 'android' (resource folder qualifiers) or 'ios' (@Nx file names)
            scale_table: Override for the platform's default scale table

        Returns:
            BaseSizeClassifier: Classifier instance

        Raises:
            ValueError: unknown platform
        """
        key = platform.strip().lower()
        classifier_cls = ClassifierFactory._registry.get(key)
        if classifier_cls is None:
            raise ValueError(
                f"Unknown platform: {platform}, expected one of "
                f"{', '.join(ClassifierFactory.platforms())}"
            )

        logger.debug(
            f"Creating {key} classifier"
            + (" with custom scale table" if scale_table is not None else "")
        )
        return classifier_cls(scale_table)


# Convenience function
def create_classifier(
    platform: str = "android", scale_table: Optional[ScaleTable] = None
) -> BaseSizeClassifier:
    """Create a size classifier (convenience function)"""
    return ClassifierFactory.create_classifier(platform, scale_table)
