# src/areacount/detectors/binarizer.py
from __future__ import annotations
from typing import Optional
import numbers
import numpy as np

from ..core.base import ImagingPrimitives
from ..exceptions import InvalidArgumentError

MAX_PIXEL_VALUE = 255


def validate_threshold(threshold) -> int:
    """Return ``threshold`` as int, or raise InvalidArgumentError if outside [0, 255]."""
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Integral):
        raise InvalidArgumentError(
            f"Threshold must be an integer between 0 and {MAX_PIXEL_VALUE}, got {threshold!r}"
        )
    if threshold < 0 or threshold > MAX_PIXEL_VALUE:
        raise InvalidArgumentError(
            f"Threshold must be between 0 and {MAX_PIXEL_VALUE}, got {threshold}"
        )
    return int(threshold)


def binarize(image: np.ndarray, threshold: int,
             primitives: Optional[ImagingPrimitives] = None) -> np.ndarray:
    """
    Inverted binary threshold.

    A pixel becomes foreground (255) iff its intensity is strictly below
    ``threshold``. Light images with dark lines want a high value (240),
    dark images with light lines a lower one (200); polarity is chosen by
    the number alone.
    """
    threshold = validate_threshold(threshold)
    if primitives is None:
        from ..core.image_utils import ImageProcessor
        primitives = ImageProcessor()
    primitives.validate_image(image)
    return primitives.threshold(image, threshold, MAX_PIXEL_VALUE, invert=True)
