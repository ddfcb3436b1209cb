"""Pytest fixtures for densify tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Tuple

import pytest
from PIL import Image

from densify.config.loader import CONFIG_ENV_VAR
from densify.core.settings import get_settings

Color = Tuple[int, ...]


def _make_image(
    path: Path,
    size: Tuple[int, int],
    color: Color = (200, 30, 30, 255),
    mode: str = "RGBA",
    dpi: Optional[Tuple[int, int]] = None,
    fmt: Optional[str] = None,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new(mode, size, color)
    kwargs = {"dpi": dpi} if dpi else {}
    image.save(path, format=fmt or "PNG", **kwargs)
    return path


@pytest.fixture(autouse=True)
def default_config(monkeypatch: pytest.MonkeyPatch):
    """Run every test against the packaged default configuration."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    get_settings(reload=True)
    yield
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    get_settings(reload=True)


@pytest.fixture
def make_image() -> Callable[..., Path]:
    """Factory writing a solid-colour image file and returning its path."""
    return _make_image


@pytest.fixture
def res_dir(tmp_path: Path) -> Path:
    """Android-style resource root inside a temporary directory."""
    path = tmp_path / "res"
    path.mkdir()
    return path


@pytest.fixture
def mdpi_icon(res_dir: Path) -> Path:
    """A 100x100 mdpi drawable."""
    return _make_image(res_dir / "drawable-mdpi" / "icon.png", (100, 100))
