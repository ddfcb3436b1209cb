"""
densify
Generates every missing density variant of raster assets by resampling the
largest supplied variant
"""

from densify.processing import (
    ResizePipeline,
    ScaleEntry,
    ScaleTable,
    get_resize_pipeline,
)
from densify.classifiers import create_classifier

__version__ = "0.1.0"

__all__ = [
    "ResizePipeline",
    "ScaleEntry",
    "ScaleTable",
    "create_classifier",
    "get_resize_pipeline",
    "__version__",
]
