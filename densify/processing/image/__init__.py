"""
Image module

Provides the pixel side of the pipeline:
- Reference selection and resampling (bicubic / LANCZOS)
- Atomic PNG output
"""

from .resampler import RESAMPLE_FILTERS, ImageResampler, scaled_size
from .writer import PngWriter

__all__ = [
    "RESAMPLE_FILTERS",
    "ImageResampler",
    "PngWriter",
    "scaled_size",
]
