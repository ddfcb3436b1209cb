"""
Platform-specific classifier implementations
Each platform pairs a classifier with its default scale table
"""

from .android import ANDROID_SCALE_TABLE, AndroidClassifier, AndroidDensity
from .ios import IOS_SCALE_TABLE, IosClassifier, IosScale

__all__ = [
    "ANDROID_SCALE_TABLE",
    "AndroidClassifier",
    "AndroidDensity",
    "IOS_SCALE_TABLE",
    "IosClassifier",
    "IosScale",
]
