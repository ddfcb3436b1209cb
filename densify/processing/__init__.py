"""
Processing module

Variant resolution and resampling engine:
- Scale table (size class -> scale factor, marker)
- Grouping by logical identifier
- Placeholder synthesis for missing size classes
- Resampling and PNG output
"""

from .scale_table import ScaleEntry, ScaleTable
from .grouping import GroupingEngine
from .synthesis import VariantSynthesizer
from .image import ImageResampler, PngWriter, scaled_size
from .pipeline import ResizePipeline, get_resize_pipeline

__all__ = [
    # Classes
    "GroupingEngine",
    "ImageResampler",
    "PngWriter",
    "ResizePipeline",
    "ScaleEntry",
    "ScaleTable",
    "VariantSynthesizer",
    # Functions
    "get_resize_pipeline",
    "scaled_size",
]
