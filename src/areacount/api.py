# src/areacount/api.py
"""Public API."""
from __future__ import annotations
from typing import Any, Dict, Optional, Sequence, Tuple
from dataclasses import asdict

from areacount.analyzer import AreaCounter, CountResult
from areacount.config import ClassifierConfig, FeatureConfig, ThresholdConfig
from areacount.features import ImageFeatures
from areacount.regression import DEFAULT_MODEL_PATH

_counter: Optional[AreaCounter] = None


def _get_counter() -> AreaCounter:
    """Get or create singleton counter instance."""
    global _counter
    if _counter is None:
        _counter = AreaCounter()
    return _counter


def _apply(cfg: Any, kind: str, kwargs: Dict[str, Any]) -> None:
    for k, v in kwargs.items():
        if hasattr(cfg, k):
            setattr(cfg, k, v)
        else:
            raise ValueError(f"Unknown {kind} parameter: {k}")
    cfg.validate()


def configure_classifier(**kwargs) -> None:
    """
    Update rectangle classification rules at runtime.

    Parameters
    ----------
    approx_epsilon_factor : float
        Polygon approximation tolerance as a fraction of the perimeter
    vertex_count : int
        Required number of polygon vertices
    min_rect_area : float
        Noise floor in px^2; smaller polygons are ignored
    edge_margin : int
        Margin used to recognise the full-frame border contour

    Examples
    --------
    ::

        configure_classifier(min_rect_area=500, edge_margin=3)
    """
    _apply(_get_counter().classifier_config, "classifier", kwargs)


def configure_features(**kwargs) -> None:
    """
    Update the feature extraction parameters.

    Changing these breaks parity with models trained on the defaults.

    Parameters
    ----------
    canny_low, canny_high : int
        Canny hysteresis thresholds
    binary_threshold : int
        Fixed binarization threshold of the feature branch
    min_contour_area : float
        Area floor for the contour statistics
    """
    _apply(_get_counter().feature_config, "feature", kwargs)


def configure_thresholds(**kwargs) -> None:
    """Update the filename heuristic used by suggest_threshold."""
    _apply(_get_counter().threshold_config, "threshold", kwargs)


def get_configs(as_dict: bool = False) -> Tuple[ClassifierConfig | Dict[str, Any],
                                                FeatureConfig | Dict[str, Any],
                                                ThresholdConfig | Dict[str, Any]]:
    """
    Get current configuration.

    Returns
    -------
    tuple
        (ClassifierConfig, FeatureConfig, ThresholdConfig) or three dicts
    """
    c = _get_counter()
    cfgs = (c.classifier_config, c.feature_config, c.threshold_config)
    if as_dict:
        return tuple(asdict(x) for x in cfgs)
    return cfgs


def count_areas(image_path: str, threshold: Optional[int] = None,
                show_steps: bool = False, draw_contours: bool = False,
                save_path: Optional[str] = None) -> CountResult:
    """
    Count rectangular areas with the geometric pipeline.

    Parameters
    ----------
    image_path : str
        Path to image file
    threshold : int, optional
        Binarization threshold (0-255); pixels darker than it are foreground.
        Suggested from the file name when omitted.
    show_steps : bool
        Show grayscale and binary images (requires a GUI)
    draw_contours : bool
        Show all traced contours (requires a GUI)
    save_path : str, optional
        Write an annotated copy of the image with the accepted rectangles

    Returns
    -------
    CountResult
        ``(success, count)``; ``(False, -1)`` if the file exists but cannot
        be decoded

    Raises
    ------
    InvalidArgumentError
        Threshold outside [0, 255] or empty path
    NotFoundError
        Image file does not exist

    Examples
    --------
    ::

        ok, n = count_areas("Sample 1.png")
        print(f"Found {n} rectangles")
    """
    c = _get_counter()
    if threshold is None:
        threshold = c.suggest_threshold(image_path)
    return c.count_areas(image_path, threshold, show_steps=show_steps,
                         draw_contours=draw_contours, save_path=save_path)


def extract_features(image_path: str) -> ImageFeatures:
    """
    Feature vector used by the regression model.

    Returns
    -------
    ImageFeatures
        contour_count, avg_contour_area, std_contour_area, edge_density,
        avg_rect_aspect_ratio
    """
    return _get_counter().extract_features(image_path)


def suggest_threshold(image_path: str) -> int:
    """Default threshold for ``image_path`` based on its file name."""
    return _get_counter().suggest_threshold(image_path)


def train_model(images: Sequence[str], labels: Sequence[float],
                model_path: str = DEFAULT_MODEL_PATH) -> None:
    """
    Train the regression model and save it to ``model_path``.

    Examples
    --------
    ::

        train_model(["a.png", "b.png"], [2, 5], "model.joblib")
    """
    _get_counter().train(images, labels, model_path)


def predict_count(image_path: str, model_path: str = DEFAULT_MODEL_PATH) -> float:
    """Predicted rectangle count (raw regressor output) for ``image_path``."""
    return _get_counter().predict(image_path, model_path)
