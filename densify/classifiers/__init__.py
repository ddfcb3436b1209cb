"""
Size classifiers
Map provenance paths to (logical identifier, size class) pairs
"""

from .base import BaseSizeClassifier, Classification
from .platforms import (
    ANDROID_SCALE_TABLE,
    IOS_SCALE_TABLE,
    AndroidClassifier,
    AndroidDensity,
    IosClassifier,
    IosScale,
)
from .factory import ClassifierFactory, create_classifier

__all__ = [
    "BaseSizeClassifier",
    "Classification",
    "ANDROID_SCALE_TABLE",
    "IOS_SCALE_TABLE",
    "AndroidClassifier",
    "AndroidDensity",
    "IosClassifier",
    "IosScale",
    "ClassifierFactory",
    "create_classifier",
]
