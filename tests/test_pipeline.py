"""End-to-end tests for the resize pipeline."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest
from PIL import Image

from densify.classifiers import AndroidClassifier, IosClassifier
from densify.core.errors import BatchFailed
from densify.core.settings import get_settings
from densify.models import VariantState
from densify.processing import ResizePipeline, get_resize_pipeline

BLUE = (0, 0, 255, 255)


@pytest.fixture
def pipeline() -> ResizePipeline:
    return ResizePipeline(classifier=AndroidClassifier(), max_workers=2)


def _sizes(group) -> dict:
    return {entry.size_class: (entry.width, entry.height) for entry in group.synthesized()}


class TestResizePipeline:
    """Tests for ResizePipeline.run."""

    def test_single_mdpi_image(self, pipeline: ResizePipeline, mdpi_icon: Path, res_dir: Path) -> None:
        result = pipeline.run([mdpi_icon])

        group = result.get("drawable/icon")
        assert result.ok
        assert len(group.synthesized()) == 6
        sizes = _sizes(group)
        assert sizes["LDPI"] == (75, 75)
        assert sizes["TVDPI"] == (133, 133)
        assert sizes["XXXHDPI"] == (400, 400)
        with Image.open(res_dir / "drawable-xxxhdpi" / "icon.png") as img:
            assert img.size == (400, 400)

    def test_duplicate_size_class_fails_group(
        self, pipeline: ResizePipeline, make_image, tmp_path: Path
    ) -> None:
        first = make_image(tmp_path / "a" / "drawable-hdpi" / "icon.png", (30, 30))
        second = make_image(tmp_path / "b" / "drawable-hdpi" / "icon.png", (30, 30))
        other = make_image(tmp_path / "a" / "drawable-mdpi" / "logo.png", (10, 10))

        result = pipeline.run([first, second, other])

        group = result.get("drawable/icon")
        assert not group.success
        assert group.error_type == "DuplicateVariant"
        assert "HDPI" in group.error and "drawable/icon" in group.error
        assert group.synthesized() == []
        assert not (tmp_path / "a" / "drawable-mdpi" / "icon.png").exists()
        assert not (tmp_path / "b" / "drawable-mdpi" / "icon.png").exists()
        assert result.get("drawable/logo").success
        with pytest.raises(BatchFailed) as exc_info:
            result.raise_for_errors()
        failure = exc_info.value.failures[0]
        assert failure.error_type == "DuplicateVariant"
        assert failure.identifier == "drawable/icon"
        assert failure.size_class == "HDPI"
        assert failure.path == str(second)

    def test_allow_list(self, mdpi_icon: Path, res_dir: Path) -> None:
        pipeline = ResizePipeline(output_formats=["hdpi", "xhdpi"])

        result = pipeline.run([mdpi_icon])

        assert _sizes(result.get("drawable/icon")) == {"HDPI": (150, 150), "XHDPI": (200, 200)}
        assert not (res_dir / "drawable-ldpi").exists()

    def test_largest_supplied_image_is_reference(
        self, pipeline: ResizePipeline, make_image, res_dir: Path
    ) -> None:
        mdpi = make_image(res_dir / "drawable-mdpi" / "icon.png", (100, 100))
        xhdpi = make_image(res_dir / "drawable-xhdpi" / "icon.png", (200, 200), color=BLUE)

        result = pipeline.run([mdpi, xhdpi])

        assert _sizes(result.get("drawable/icon"))["LDPI"] == (75, 75)
        with Image.open(res_dir / "drawable-ldpi" / "icon.png") as img:
            red, _, blue, _ = img.convert("RGBA").getpixel((37, 37))
        assert blue > 200 and red < 50

    def test_empty_input(self, pipeline: ResizePipeline) -> None:
        result = pipeline.run([])

        assert result.groups == []
        assert result.ok
        assert result.output_paths() == []

    def test_rejected_inputs_are_reported(
        self, pipeline: ResizePipeline, mdpi_icon: Path, res_dir: Path
    ) -> None:
        result = pipeline.run(
            [res_dir / "values" / "icon.png", mdpi_icon, res_dir / "drawable" / "bare.png"]
        )

        assert [item.error_type for item in result.rejected] == [
            "StructureError",
            "ClassificationError",
        ]
        assert result.get("drawable/icon").success
        assert not result.ok
        assert len(result.failures()) == 2

    def test_unreadable_reference_fails_group(self, pipeline: ResizePipeline, res_dir: Path) -> None:
        result = pipeline.run([res_dir / "drawable-mdpi" / "ghost.png"])

        group = result.get("drawable/ghost")
        assert group.error_type == "ImageReadError"
        assert all(entry.state is VariantState.FAILED for entry in group.synthesized())
        assert len(group.failures()) == 1
        assert not (res_dir / "drawable-hdpi").exists()

    def test_oversized_reference_fails_only_its_group(
        self, pipeline: ResizePipeline, make_image, res_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        small = make_image(res_dir / "drawable-mdpi" / "ok.png", (10, 10))
        big = make_image(res_dir / "drawable-mdpi" / "big.png", (300, 300))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 40000)

        result = pipeline.run([small, big])

        assert result.get("drawable/ok").success
        group = result.get("drawable/big")
        assert group.error_type == "ImageReadError"
        assert group.failures()[0].path == str(big)
        assert not (res_dir / "drawable-hdpi" / "big.png").exists()

    def test_every_supplied_entry_carries_its_pixels(
        self, pipeline: ResizePipeline, make_image, res_dir: Path
    ) -> None:
        mdpi = make_image(res_dir / "drawable-mdpi" / "icon.png", (10, 10))
        xhdpi = make_image(res_dir / "drawable-xhdpi" / "icon.png", (20, 20), color=BLUE)

        result = pipeline.run([mdpi, xhdpi])

        supplied = [entry for entry in result.get("drawable/icon").entries if entry.supplied]
        assert [(entry.size_class, entry.width, entry.height) for entry in supplied] == [
            ("MDPI", 10, 10),
            ("XHDPI", 20, 20),
        ]
        with Image.open(mdpi) as original:
            assert supplied[0].image.tobytes() == original.tobytes()

    def test_unreadable_supplied_image_is_reported(
        self, pipeline: ResizePipeline, make_image, res_dir: Path
    ) -> None:
        ghost = res_dir / "drawable-mdpi" / "icon.png"
        xhdpi = make_image(res_dir / "drawable-xhdpi" / "icon.png", (20, 20))

        result = pipeline.run([ghost, xhdpi])

        group = result.get("drawable/icon")
        assert not group.success
        assert [(f.size_class, f.error_type) for f in group.failures()] == [
            ("MDPI", "ImageReadError")
        ]
        assert all(entry.ok for entry in group.synthesized())

    def test_in_memory_inputs(self, pipeline: ResizePipeline, res_dir: Path) -> None:
        image = Image.new("RGBA", (48, 48), BLUE)

        result = pipeline.run([(res_dir / "drawable-mdpi" / "mem.png", image)])

        group = result.get("drawable/mem")
        supplied = [entry for entry in group.entries if entry.supplied]
        assert supplied[0].image is image
        assert _sizes(group)["XXHDPI"] == (144, 144)
        assert (res_dir / "drawable-xxhdpi" / "mem.png").exists()

    def test_groups_keep_input_order(self, pipeline: ResizePipeline, make_image, res_dir: Path) -> None:
        paths = [
            make_image(res_dir / "drawable-mdpi" / f"{name}.png", (8, 8))
            for name in ("zeta", "alpha", "mid")
        ]

        result = pipeline.run(paths)

        assert [group.identifier for group in result.groups] == [
            "drawable/zeta",
            "drawable/alpha",
            "drawable/mid",
        ]
        assert [entry.size_class for entry in result.groups[0].entries] == [
            "MDPI",
            "LDPI",
            "TVDPI",
            "HDPI",
            "XHDPI",
            "XXHDPI",
            "XXXHDPI",
        ]

    def test_output_paths_include_supplied(self, pipeline: ResizePipeline, mdpi_icon: Path) -> None:
        result = pipeline.run([mdpi_icon])

        paths = result.output_paths()
        assert str(mdpi_icon) in paths
        assert len(paths) == 7

    def test_rerun_is_stable(self, pipeline: ResizePipeline, mdpi_icon: Path, tmp_path: Path) -> None:
        copy_root = tmp_path / "copy" / "res"
        shutil.copytree(mdpi_icon.parent, copy_root / "drawable-mdpi")

        first = pipeline.run([mdpi_icon])
        second = pipeline.run([copy_root / "drawable-mdpi" / "icon.png"])

        assert _sizes(first.groups[0]) == _sizes(second.groups[0])

    def test_complete_group_needs_no_work(self, pipeline: ResizePipeline, mdpi_icon: Path, res_dir: Path) -> None:
        pipeline.run([mdpi_icon])

        result = pipeline.run(sorted(res_dir.rglob("*.png")))

        assert result.ok
        assert result.groups[0].synthesized() == []
        assert len(result.groups[0].entries) == 7

    def test_json_manifest_uses_camel_case(self, pipeline: ResizePipeline, mdpi_icon: Path) -> None:
        data = json.loads(pipeline.run([mdpi_icon]).model_dump_json())

        entry = data["groups"][0]["entries"][1]
        assert entry["sizeClass"] == "LDPI"
        assert entry["outputPath"].endswith("icon.png")
        assert entry["state"] == "resolved"
        assert "image" not in entry

    def test_ios_batch(self, make_image, tmp_path: Path) -> None:
        path = make_image(tmp_path / "Assets" / "icon@3x.png", (90, 90))

        result = ResizePipeline(classifier=IosClassifier()).run([path])

        assert _sizes(result.get(f"{(tmp_path / 'Assets').as_posix()}/icon")) == {
            "X1": (30, 30),
            "X2": (60, 60),
        }
        assert (tmp_path / "Assets" / "icon.png").exists()
        assert (tmp_path / "Assets" / "icon@2x.png").exists()


class TestGetResizePipeline:
    """Tests for building a pipeline from configuration."""

    def test_defaults(self) -> None:
        pipeline = get_resize_pipeline()
        assert isinstance(pipeline.classifier, AndroidClassifier)
        assert pipeline.synthesizer.output_formats == []
        assert pipeline.resampler.resample == "bicubic"
        assert pipeline.max_workers == 4

    def test_from_config_file(self, tmp_path: Path) -> None:
        config = tmp_path / "densify.toml"
        config.write_text('[resize]\nplatform = "ios"\noutput_formats = "2x"\nresample = "LANCZOS"\n')
        get_settings(config_path=config)

        pipeline = get_resize_pipeline()

        assert isinstance(pipeline.classifier, IosClassifier)
        assert pipeline.synthesizer.output_formats == ["2x"]
        assert pipeline.resampler.resample == "lanczos"

    def test_overrides_win(self, tmp_path: Path) -> None:
        config = tmp_path / "densify.toml"
        config.write_text('[resize]\nplatform = "ios"\n')
        get_settings(config_path=config)

        pipeline = get_resize_pipeline(platform="android", max_workers=1, output_formats=None)

        assert isinstance(pipeline.classifier, AndroidClassifier)
        assert pipeline.max_workers == 1
