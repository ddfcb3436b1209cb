"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from PIL import Image

from densify.cli import collect_inputs, main


class TestCollectInputs:
    """Tests for input discovery."""

    def test_scans_folders_for_images(self, make_image, res_dir: Path) -> None:
        icon = make_image(res_dir / "drawable-mdpi" / "icon.png", (4, 4))
        make_image(res_dir / "drawable-mdpi" / ".hidden.png", (4, 4))
        (res_dir / "drawable-mdpi" / "notes.txt").write_text("skip me")

        assert collect_inputs([str(res_dir)]) == [icon]

    def test_duplicates_are_dropped(self, make_image, res_dir: Path) -> None:
        icon = make_image(res_dir / "drawable-mdpi" / "icon.png", (4, 4))

        assert collect_inputs([str(icon), str(res_dir)]) == [icon]

    def test_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            collect_inputs([str(tmp_path / "missing")])


class TestMain:
    """Tests for main()."""

    def test_generates_all_densities(
        self, mdpi_icon: Path, res_dir: Path, capsys: pytest.CaptureFixture
    ) -> None:
        assert main([str(res_dir)]) == 0

        out = capsys.readouterr().out
        assert "drawable/icon" in out
        assert "XXXHDPI 400x400" in out
        with Image.open(res_dir / "drawable-xxxhdpi" / "icon.png") as img:
            assert img.size == (400, 400)

    def test_formats_flag(self, mdpi_icon: Path, res_dir: Path) -> None:
        assert main([str(res_dir), "--formats", "hdpi"]) == 0

        assert sorted(p.name for p in res_dir.iterdir()) == ["drawable-hdpi", "drawable-mdpi"]

    def test_json_output(self, mdpi_icon: Path, res_dir: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(res_dir), "--json", "--resample", "lanczos"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["groups"][0]["identifier"] == "drawable/icon"
        assert data["groups"][0]["success"] is True
        assert data["rejected"] == []

    def test_failures_exit_with_one(
        self, make_image, tmp_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        make_image(tmp_path / "a" / "drawable-hdpi" / "icon.png", (6, 6))
        make_image(tmp_path / "b" / "drawable-hdpi" / "icon.png", (6, 6))

        assert main([str(tmp_path)]) == 1
        assert "DuplicateVariant" in capsys.readouterr().out

    def test_ios_platform(self, make_image, tmp_path: Path) -> None:
        make_image(tmp_path / "icon@2x.png", (20, 20))

        assert main([str(tmp_path), "--platform", "ios"]) == 0

        with Image.open(tmp_path / "icon@3x.png") as img:
            assert img.size == (30, 30)

    def test_missing_path_exits_with_two(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(tmp_path / "missing")]) == 2
        assert "Error" in capsys.readouterr().err

    def test_invalid_worker_count_exits_with_two(self, mdpi_icon: Path, res_dir: Path) -> None:
        assert main([str(res_dir), "--workers", "0"]) == 2

    def test_missing_config_exits_with_two(self, mdpi_icon: Path, res_dir: Path, tmp_path: Path) -> None:
        assert main([str(res_dir), "--config", str(tmp_path / "nope.toml")]) == 2
