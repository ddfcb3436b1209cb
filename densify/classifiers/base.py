"""
Size classifier base class
Platform-specific classifiers map provenance paths to (identifier, size class)
and decide where synthesized variants are written
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Union

from densify.processing.scale_table import ScaleTable


class Classification(NamedTuple):
    identifier: str
    size_class: Enum


class BaseSizeClassifier(ABC):
    """Classifier interface

    Implementations are stateless after construction and safe to share between
    threads. They never look at pixel data.
    """

    #: Platform key used by the factory
    platform: str = ""

    def __init__(self, scale_table: ScaleTable):
        self.scale_table = scale_table

    @abstractmethod
    def classify(self, path: Union[str, Path]) -> Classification:
        """Derive the logical identifier and size class of an input

        Raises:
            ClassificationError: no size-class marker matches
            StructureError: the identifier cannot be derived
        """

    @abstractmethod
    def resolve_root(self, path: Union[str, Path], identifier: str = "") -> Path:
        """Output base directory for a group, from one of its supplied images

        Raises:
            RootResolutionError: the base directory cannot be derived
        """

    @abstractmethod
    def output_path(self, root: Path, identifier: str, size_class: Enum) -> Path:
        """Where a synthesized variant of `identifier` is written"""
