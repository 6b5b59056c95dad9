# src/areacount/__init__.py
from .api import (
    count_areas,
    extract_features,
    suggest_threshold,
    train_model,
    predict_count,
    configure_classifier,
    configure_features,
    configure_thresholds,
    get_configs,
)
from .analyzer import AreaCounter, CountResult
from .config import ClassifierConfig, FeatureConfig, ThresholdConfig
from .features import ImageFeatures
from .__version__ import __version__

__all__ = [
    "count_areas",
    "extract_features",
    "suggest_threshold",
    "train_model",
    "predict_count",
    "configure_classifier",
    "configure_features",
    "configure_thresholds",
    "get_configs",
    "AreaCounter",
    "CountResult",
    "ClassifierConfig",
    "FeatureConfig",
    "ThresholdConfig",
    "ImageFeatures",
    "__version__",
]
