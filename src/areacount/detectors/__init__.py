# src/areacount/detectors/__init__.py
from areacount.detectors.binarizer import binarize, validate_threshold
from areacount.detectors.rectangles import RectangleClassifier, classify_rectangles

__all__ = [
    "binarize",
    "validate_threshold",
    "RectangleClassifier",
    "classify_rectangles",
]
