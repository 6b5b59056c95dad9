# src/areacount/core/image_utils.py
from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Tuple
import numpy as np

from .base import Contour, ImagingPrimitives, Rect


class ImageProcessor(ImagingPrimitives):
    """OpenCV implementation of the imaging primitives."""

    def __init__(self):
        self._cv2 = None

    @property
    def cv2(self):
        """Lazy import of OpenCV."""
        if self._cv2 is None:
            try:
                import cv2
                self._cv2 = cv2
            except ImportError as e:
                raise ImportError(
                    "OpenCV is required: pip install opencv-python"
                ) from e
        return self._cv2

    def decode(self, path: str, color: bool = False) -> Optional[np.ndarray]:
        mode = self.cv2.IMREAD_COLOR if color else self.cv2.IMREAD_GRAYSCALE
        img = self.cv2.imread(str(Path(path)), mode)
        if img is None or img.size == 0:
            return None
        return img

    def detect_edges(self, image: np.ndarray, low: float, high: float) -> np.ndarray:
        return self.cv2.Canny(image, low, high)

    def threshold(self, image: np.ndarray, value: int, max_value: int = 255,
                  invert: bool = True) -> np.ndarray:
        # cv2 compares with ">", so shifting by one gives "< value" / ">= value"
        kind = self.cv2.THRESH_BINARY_INV if invert else self.cv2.THRESH_BINARY
        _, mask = self.cv2.threshold(image, int(value) - 1, max_value, kind)
        return mask

    def find_contours(self, mask: np.ndarray,
                      hierarchy: bool = True) -> Tuple[List[Contour], Optional[np.ndarray]]:
        mode = self.cv2.RETR_TREE if hierarchy else self.cv2.RETR_EXTERNAL
        contours, tree = self.cv2.findContours(mask, mode, self.cv2.CHAIN_APPROX_SIMPLE)
        return list(contours), tree

    def approx_polygon(self, contour: Contour, epsilon: float) -> Contour:
        return self.cv2.approxPolyDP(contour, epsilon, True)

    def contour_area(self, contour: Contour) -> float:
        return float(self.cv2.contourArea(contour))

    def bounding_rect(self, contour: Contour) -> Rect:
        x, y, w, h = self.cv2.boundingRect(contour)
        return int(x), int(y), int(w), int(h)

    def is_convex(self, contour: Contour) -> bool:
        return bool(self.cv2.isContourConvex(contour))

    def arc_length(self, contour: Contour, closed: bool = True) -> float:
        return float(self.cv2.arcLength(contour, closed))

    def count_non_zero(self, mask: np.ndarray) -> int:
        return int(self.cv2.countNonZero(mask))
