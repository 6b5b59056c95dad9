# src/areacount/core/geometry.py
from __future__ import annotations
from typing import Sequence, Tuple
import numpy as np

Rect = Tuple[int, int, int, int]


def touches_all_borders(rect: Rect, width: int, height: int, margin: int = 5) -> bool:
    """True if ``rect`` (x, y, w, h) reaches all four image edges within ``margin`` px."""
    x, y, w, h = rect
    return (
        x <= margin
        and y <= margin
        and x + w >= width - margin
        and y + h >= height - margin
    )


def aspect_ratio(rect: Rect) -> float:
    """Width / height of a bounding rectangle, 0 for zero height."""
    _, _, w, h = rect
    return float(w) / h if h > 0 else 0.0


def mean_or_zero(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def population_std(values: Sequence[float]) -> float:
    """Population (ddof=0) standard deviation; 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.std(np.asarray(values, dtype=np.float64), ddof=0))
