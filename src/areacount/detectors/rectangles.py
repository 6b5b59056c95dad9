# src/areacount/detectors/rectangles.py
from __future__ import annotations
from typing import Iterable, List, Optional
import logging

from ..config import ClassifierConfig
from ..core.base import Contour, ImagingPrimitives
from ..core.geometry import touches_all_borders

logger = logging.getLogger(__name__)


class RectangleClassifier:
    """
    Count contours that approximate to clean rectangles.

    A contour is counted when its polygon approximation
    (epsilon = approx_epsilon_factor * perimeter) has exactly four vertices,
    is convex, encloses more than min_rect_area px^2, and its bounding box
    does not reach all four image edges. The last rule drops the contour
    tracing the frame itself.
    """

    def __init__(self,
                 config: Optional[ClassifierConfig] = None,
                 primitives: Optional[ImagingPrimitives] = None):
        self.config = config or ClassifierConfig()
        if primitives is None:
            from ..core.image_utils import ImageProcessor
            primitives = ImageProcessor()
        self.primitives = primitives

    def is_rectangle(self, contour: Contour) -> Optional[Contour]:
        """Return the 4-vertex approximation if ``contour`` is a rectangle candidate."""
        p = self.primitives
        epsilon = self.config.approx_epsilon_factor * p.arc_length(contour, True)
        approx = p.approx_polygon(contour, epsilon)
        if len(approx) != self.config.vertex_count:
            return None
        if not p.is_convex(approx):
            return None
        if p.contour_area(approx) <= self.config.min_rect_area:
            return None
        return approx

    def rectangles(self, contours: Iterable[Contour],
                   image_width: int, image_height: int) -> List[Contour]:
        """Accepted rectangle polygons, frame border excluded."""
        out: List[Contour] = []
        margin = self.config.edge_margin
        for c in contours:
            approx = self.is_rectangle(c)
            if approx is None:
                continue
            rect = self.primitives.bounding_rect(approx)
            if touches_all_borders(rect, image_width, image_height, margin):
                logger.debug("Skipping frame border contour at %s", rect)
                continue
            out.append(approx)
        return out

    def classify(self, contours: Iterable[Contour],
                 image_width: int, image_height: int) -> int:
        """Number of rectangles among ``contours``."""
        return len(self.rectangles(contours, image_width, image_height))


def classify_rectangles(contours: Iterable[Contour], image_width: int, image_height: int,
                        config: Optional[ClassifierConfig] = None,
                        primitives: Optional[ImagingPrimitives] = None) -> int:
    """Convenience wrapper around RectangleClassifier.classify."""
    return RectangleClassifier(config, primitives).classify(contours, image_width, image_height)
