"""
PNG output writer
"""

import os
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from PIL import Image

from densify.core.errors import ImageWriteError
from densify.core.logger import get_logger
from densify.core.paths import ensure_dir

logger = get_logger(__name__)


class PngWriter:
    """
    Persists resampled images as PNG

    Images are written to a hidden temporary file in the target folder and
    renamed over the target, so readers never see a truncated file.
    """

    def __init__(self, optimize: bool = True):
        self.optimize = optimize

    def write(
        self,
        image: Image.Image,
        path: Union[str, Path],
        dpi: Optional[Tuple[float, float]] = None,
        identifier: Optional[str] = None,
        size_class: Any = None,
    ) -> Path:
        """
        Write image to path

        Args:
            image: Image to save
            path: Target file, parent folders are created when missing
            dpi: Resolution to record, defaults to image.info["dpi"]
            identifier: Group identifier, for error context
            size_class: Size class, for error context

        Returns:
            The written path

        Raises:
            ImageWriteError: the folder or file cannot be written
        """
        path = Path(path)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")

        save_kwargs: Dict[str, Any] = {"optimize": self.optimize}
        dpi = dpi or image.info.get("dpi")
        if dpi:
            save_kwargs["dpi"] = tuple(dpi)

        # PNG grayscale tops out at 16 bits per sample
        if image.mode == "I":
            image = image.convert("I;16")

        try:
            ensure_dir(path.parent)
            image.save(tmp_path, format="PNG", **save_kwargs)
            os.replace(tmp_path, path)
        except (OSError, ValueError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise ImageWriteError(path, e, identifier=identifier, size_class=size_class) from e

        logger.debug(f"Wrote {path} ({image.width}x{image.height})")
        return path
