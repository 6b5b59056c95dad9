from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

import cv2
import numpy as np
import pytest

import areacount.api as api

Box = Tuple[int, int, int, int]  # x, y, w, h


@pytest.fixture(autouse=True)
def _fresh_counter():
    """Each test gets its own API singleton so configure_* calls don't leak."""
    api._counter = None
    yield
    api._counter = None


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """
    Write a grayscale PNG: ``background`` everywhere, ``fill`` inside each box.
    Boxes are (x, y, w, h) in pixels.
    """

    def _make(name: str = "img.png", size: Tuple[int, int] = (200, 200),
              background: int = 255, fill: int = 0,
              boxes: Iterable[Box] = (), array: Optional[np.ndarray] = None) -> Path:
        if array is None:
            w, h = size
            array = np.full((h, w), background, dtype=np.uint8)
            for x, y, bw, bh in boxes:
                array[y:y + bh, x:x + bw] = fill
        path = tmp_path / name
        assert cv2.imwrite(str(path), array)
        return path

    return _make


@pytest.fixture
def corrupt_image(tmp_path: Path) -> Path:
    path = tmp_path / "broken.png"
    path.write_bytes(b"not really a png")
    return path
