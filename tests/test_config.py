import pytest

import areacount
from areacount.config import ClassifierConfig, FeatureConfig, ThresholdConfig
from areacount.exceptions import ConfigurationError, InvalidArgumentError


def test_defaults_match_pipeline_constants() -> None:
    c, f, t = areacount.get_configs()
    assert (c.approx_epsilon_factor, c.vertex_count, c.min_rect_area, c.edge_margin) == (0.02, 4, 1000.0, 5)
    assert (f.canny_low, f.canny_high, f.binary_threshold, f.min_contour_area) == (100, 200, 200, 100.0)
    assert (t.dark_area_hint, t.dark_area_threshold, t.light_area_threshold) == ("Sample 3", 200, 240)


@pytest.mark.parametrize(
    "cfg",
    [
        ClassifierConfig(approx_epsilon_factor=0.0),
        ClassifierConfig(vertex_count=2),
        ClassifierConfig(min_rect_area=-1),
        ClassifierConfig(edge_margin=-5),
        FeatureConfig(canny_low=300, canny_high=200),
        FeatureConfig(binary_threshold=256),
        FeatureConfig(min_contour_area=-1),
        ThresholdConfig(dark_area_hint=""),
        ThresholdConfig(light_area_threshold=300),
    ],
)
def test_invalid_configs(cfg) -> None:
    with pytest.raises(ConfigurationError):
        cfg.validate()


def test_configure_classifier_changes_count(make_image) -> None:
    path = str(make_image(boxes=[(50, 50, 30, 30)]))  # area 29*29 = 841
    assert areacount.count_areas(path, 240) == (True, 0)
    areacount.configure_classifier(min_rect_area=500)
    assert areacount.count_areas(path, 240) == (True, 1)


def test_configure_unknown_key() -> None:
    with pytest.raises(ValueError):
        areacount.configure_features(sigma=2.0)


def test_configure_rejects_invalid_value() -> None:
    with pytest.raises(ConfigurationError):
        areacount.configure_thresholds(dark_area_threshold=-3)


def test_get_configs_as_dict() -> None:
    areacount.configure_features(min_contour_area=50)
    c, f, t = areacount.get_configs(as_dict=True)
    assert f["min_contour_area"] == 50
    assert c["edge_margin"] == 5
    assert t["light_area_threshold"] == 240


def test_count_areas_defaults_to_suggested_threshold(make_image) -> None:
    # a mid-grey box: foreground at 240, background at 200
    light = str(make_image("Sample 1.png", fill=220, boxes=[(50, 50, 100, 100)]))
    dark = str(make_image("Sample 3.png", fill=220, boxes=[(50, 50, 100, 100)]))
    assert areacount.count_areas(light) == (True, 1)
    assert areacount.count_areas(dark) == (True, 0)


@pytest.mark.parametrize("path", [None, "", "   "])
def test_count_areas_rejects_missing_path(path) -> None:
    with pytest.raises(InvalidArgumentError):
        areacount.count_areas(path)
