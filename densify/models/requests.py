"""
Request / configuration models
"""

from typing import List, Literal

from pydantic import Field, field_validator

from densify.core.markers import parse_output_formats

from .base import BaseModel


class ResizeConfig(BaseModel):
    """Validated [resize] configuration"""

    platform: Literal["android", "ios"] = "android"
    output_formats: List[str] = Field(default_factory=list)
    # Nearest and bilinear kernels are not accepted
    resample: Literal["bicubic", "lanczos"] = "bicubic"
    max_workers: int = Field(default=4, ge=1)
    variant_workers: int = Field(default=2, ge=1)
    optimize: bool = True

    @field_validator("output_formats", mode="before")
    @classmethod
    def _parse_output_formats(cls, value):
        return parse_output_formats(value)

    @field_validator("platform", "resample", mode="before")
    @classmethod
    def _lower(cls, value):
        return value.strip().lower() if isinstance(value, str) else value
