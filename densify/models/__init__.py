"""
Data models for the variant pipeline
"""

from .base import BaseModel
from .entities import ImageGroup, ImageVariant, SourceImage, VariantState
from .requests import ResizeConfig
from .responses import (
    BatchResult,
    FailureRecord,
    GroupResult,
    InputRejection,
    ManifestEntry,
)

__all__ = [
    # Base
    "BaseModel",
    # Entities
    "ImageGroup",
    "ImageVariant",
    "SourceImage",
    "VariantState",
    # Configuration
    "ResizeConfig",
    # Responses
    "BatchResult",
    "FailureRecord",
    "GroupResult",
    "InputRejection",
    "ManifestEntry",
]
