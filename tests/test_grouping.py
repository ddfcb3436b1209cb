"""Tests for the grouping engine and variant synthesizer."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from densify.classifiers import ANDROID_SCALE_TABLE, AndroidClassifier, AndroidDensity
from densify.core.errors import (
    DuplicateVariant,
    InvalidSizeClass,
    NoReferenceAvailable,
    RootResolutionError,
)
from densify.models import ImageGroup, ImageVariant, SourceImage, VariantState
from densify.processing import GroupingEngine, VariantSynthesizer


def _source(path: str) -> SourceImage:
    return SourceImage(path, Image.new("RGBA", (4, 4)))


def _group(identifier: str, *paths: str) -> ImageGroup:
    classifier = AndroidClassifier()
    group = ImageGroup(identifier=identifier)
    for path in paths:
        size_class = classifier.classify(path).size_class
        group.add_supplied(ImageVariant.supplied(ANDROID_SCALE_TABLE, size_class, _source(path)))
    return group


class TestGroupingEngine:
    """Tests for GroupingEngine."""

    engine = GroupingEngine(ANDROID_SCALE_TABLE)

    def test_empty_input(self) -> None:
        assert self.engine.group([]) == {}

    def test_first_occurrence_order(self) -> None:
        groups = self.engine.group(
            [
                ("drawable/b", AndroidDensity.MDPI, _source("res/drawable-mdpi/b.png")),
                ("drawable/a", AndroidDensity.HDPI, _source("res/drawable-hdpi/a.png")),
                ("drawable/b", AndroidDensity.XHDPI, _source("res/drawable-xhdpi/b.png")),
            ]
        )

        assert list(groups) == ["drawable/b", "drawable/a"]
        assert groups["drawable/b"].size_classes() == [AndroidDensity.MDPI, AndroidDensity.XHDPI]

    def test_duplicate_fails_only_its_group(self) -> None:
        groups = self.engine.group(
            [
                ("icon", AndroidDensity.HDPI, _source("a/drawable-hdpi/icon.png")),
                ("icon", AndroidDensity.HDPI, _source("b/drawable-hdpi/icon.png")),
                ("other", AndroidDensity.MDPI, _source("a/drawable-mdpi/other.png")),
            ]
        )

        error = groups["icon"].error
        assert isinstance(error, DuplicateVariant)
        assert error.identifier == "icon"
        assert error.size_class is AndroidDensity.HDPI
        assert len(groups["icon"].variants) == 1
        assert not groups["other"].failed

    def test_class_outside_table_is_fatal(self) -> None:
        with pytest.raises(InvalidSizeClass):
            self.engine.group([("icon", AndroidDensity.NONE, _source("res/x/icon.png"))])


class TestVariantSynthesizer:
    """Tests for VariantSynthesizer."""

    def test_fills_every_missing_class(self) -> None:
        group = _group("drawable/icon", "res/drawable-mdpi/icon.png")

        added = VariantSynthesizer(AndroidClassifier()).synthesize(group)

        assert [v.size_class for v in added] == [
            AndroidDensity.LDPI,
            AndroidDensity.TVDPI,
            AndroidDensity.HDPI,
            AndroidDensity.XHDPI,
            AndroidDensity.XXHDPI,
            AndroidDensity.XXXHDPI,
        ]
        assert all(v.state is VariantState.UNRESOLVED for v in added)
        assert group.get(AndroidDensity.XXXHDPI).output_path == Path(
            "res/drawable-xxxhdpi/icon.png"
        )
        assert len(group.variants) == 7

    def test_allow_list(self) -> None:
        group = _group("drawable/icon", "res/drawable-mdpi/icon.png")

        added = VariantSynthesizer(AndroidClassifier(), output_formats="hdpi,xhdpi").synthesize(group)

        assert [v.size_class for v in added] == [AndroidDensity.HDPI, AndroidDensity.XHDPI]
        assert group.size_classes() == [
            AndroidDensity.MDPI,
            AndroidDensity.HDPI,
            AndroidDensity.XHDPI,
        ]

    def test_allow_list_keeps_supplied_classes(self) -> None:
        group = _group("drawable/icon", "res/drawable-ldpi/icon.png")

        VariantSynthesizer(AndroidClassifier(), output_formats=["xhdpi"]).synthesize(group)

        assert group.size_classes() == [AndroidDensity.LDPI, AndroidDensity.XHDPI]

    def test_complete_group_needs_nothing(self) -> None:
        paths = [f"res/drawable-{entry.marker}/icon.png" for entry in ANDROID_SCALE_TABLE]
        group = _group("drawable/icon", *paths)

        assert VariantSynthesizer(AndroidClassifier()).synthesize(group) == []

    def test_root_comes_from_first_supplied_image(self) -> None:
        group = _group("drawable/icon", "a/drawable-mdpi/icon.png", "b/drawable-hdpi/icon.png")

        VariantSynthesizer(AndroidClassifier()).synthesize(group)

        assert group.get(AndroidDensity.LDPI).output_path == Path("a/drawable-ldpi/icon.png")

    def test_group_without_supplied_image(self) -> None:
        with pytest.raises(NoReferenceAvailable):
            VariantSynthesizer(AndroidClassifier()).synthesize(ImageGroup(identifier="drawable/icon"))

    def test_unresolvable_root(self) -> None:
        group = ImageGroup(identifier="drawable/icon")
        group.add_supplied(
            ImageVariant.supplied(ANDROID_SCALE_TABLE, AndroidDensity.MDPI, _source("/icon.png"))
        )

        with pytest.raises(RootResolutionError) as exc_info:
            VariantSynthesizer(AndroidClassifier()).synthesize(group)
        assert exc_info.value.identifier == "drawable/icon"
