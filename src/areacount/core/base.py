# src/areacount/core/base.py
from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple
import numpy as np

Rect = Tuple[int, int, int, int]
Contour = np.ndarray


class ImagingPrimitives(ABC):
    """
    Geometric operations the pipeline treats as opaque and correct.

    Classification and feature aggregation only talk to this interface,
    so another backend can replace OpenCV without touching them.
    """

    def validate_image(self, image: np.ndarray) -> None:
        """Validate input image format and type."""
        if image is None or image.size == 0:
            raise ValueError("Image is empty or None")
        if image.ndim != 2:
            raise ValueError("Image must be grayscale (2D) np.uint8")
        if image.dtype != np.uint8:
            raise ValueError(f"Image must be uint8, got {image.dtype}")

    @abstractmethod
    def decode(self, path: str, color: bool = False) -> Optional[np.ndarray]:
        """Decode an image file; None when the file is unreadable."""
        ...

    @contextmanager
    def open_image(self, path: str, color: bool = False) -> Iterator[Optional[np.ndarray]]:
        """
        Decode ``path`` for the duration of a ``with`` block.

        Yields None when the file cannot be decoded. The buffer reference is
        dropped on every exit path, including exceptions raised in the block.
        """
        img = self.decode(path, color=color)
        try:
            yield img
        finally:
            del img

    @abstractmethod
    def detect_edges(self, image: np.ndarray, low: float, high: float) -> np.ndarray:
        ...

    @abstractmethod
    def threshold(self, image: np.ndarray, value: int, max_value: int = 255,
                  invert: bool = True) -> np.ndarray:
        """
        Binarize ``image``.

        With ``invert`` a pixel becomes ``max_value`` iff its intensity is
        strictly less than ``value``; without it, iff it is ``>= value``.
        """
        ...

    @abstractmethod
    def find_contours(self, mask: np.ndarray,
                      hierarchy: bool = True) -> Tuple[List[Contour], Optional[np.ndarray]]:
        """Trace contours; the full tree when ``hierarchy`` is set, else outer ones only."""
        ...

    @abstractmethod
    def approx_polygon(self, contour: Contour, epsilon: float) -> Contour:
        ...

    @abstractmethod
    def contour_area(self, contour: Contour) -> float:
        ...

    @abstractmethod
    def bounding_rect(self, contour: Contour) -> Rect:
        ...

    @abstractmethod
    def is_convex(self, contour: Contour) -> bool:
        ...

    @abstractmethod
    def arc_length(self, contour: Contour, closed: bool = True) -> float:
        ...

    @abstractmethod
    def count_non_zero(self, mask: np.ndarray) -> int:
        ...


def image_size(image: np.ndarray) -> Tuple[int, int]:
    """Return (width, height) of a buffer."""
    return int(image.shape[1]), int(image.shape[0])


def as_points(points: Sequence[Sequence[int]]) -> Contour:
    """Pack (x, y) pairs into the (N, 1, 2) int32 layout contours use."""
    return np.asarray(points, dtype=np.int32).reshape(-1, 1, 2)
