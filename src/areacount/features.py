# src/areacount/features.py
"""Fixed-size feature vector for the rectangle-count regressor."""
from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Dict, List, Optional, Tuple
import logging
import numpy as np

from .config import FeatureConfig
from .core.base import ImagingPrimitives
from .core.geometry import aspect_ratio, mean_or_zero, population_std
from .exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageFeatures:
    """Per-image summary consumed by the regression backend."""

    contour_count: float = 0.0
    avg_contour_area: float = 0.0
    std_contour_area: float = 0.0
    edge_density: float = 0.0
    avg_rect_aspect_ratio: float = 0.0

    def as_array(self) -> np.ndarray:
        """Values in FEATURE_NAMES order, as float32."""
        return np.array([getattr(self, n) for n in FEATURE_NAMES], dtype=np.float32)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


FEATURE_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(ImageFeatures))


class FeatureAggregator:
    """
    Compute ImageFeatures from a grayscale buffer.

    Steps:
    1. Canny edges (canny_low/canny_high); edge_density = edge pixels / (w*h).
    2. Inverted binarization at the fixed binary_threshold (intensity < 200
       is foreground), independent of any threshold used for counting.
    3. Full contour tree of the mask; contour_count is its raw length.
    4. Contours with area > min_contour_area contribute their area and their
       bounding-box aspect ratio (w/h, 0 when h == 0).
    5. Mean and population std of the areas, mean of the aspect ratios.
    """

    def __init__(self,
                 config: Optional[FeatureConfig] = None,
                 primitives: Optional[ImagingPrimitives] = None):
        self.config = config or FeatureConfig()
        if primitives is None:
            from .core.image_utils import ImageProcessor
            primitives = ImageProcessor()
        self.primitives = primitives

    def edge_density(self, image: np.ndarray) -> float:
        p = self.primitives
        edges = p.detect_edges(image, self.config.canny_low, self.config.canny_high)
        total = image.shape[0] * image.shape[1]
        return float(p.count_non_zero(edges)) / total

    def aggregate(self, image: np.ndarray) -> ImageFeatures:
        p = self.primitives
        p.validate_image(image)

        edge_density = self.edge_density(image)

        binary = p.threshold(image, self.config.binary_threshold, 255, invert=True)
        contours, _ = p.find_contours(binary, hierarchy=True)

        areas: List[float] = []
        ratios: List[float] = []
        for c in contours:
            area = p.contour_area(c)
            if area > self.config.min_contour_area:
                areas.append(area)
                ratios.append(aspect_ratio(p.bounding_rect(c)))

        features = ImageFeatures(
            contour_count=float(len(contours)),
            avg_contour_area=mean_or_zero(areas),
            std_contour_area=population_std(areas),
            edge_density=edge_density,
            avg_rect_aspect_ratio=mean_or_zero(ratios),
        )
        logger.debug("Features: %s (%d contours above area floor)", features, len(areas))
        return features


def extract_features(image_path: str,
                     config: Optional[FeatureConfig] = None,
                     primitives: Optional[ImagingPrimitives] = None) -> ImageFeatures:
    """Decode ``image_path`` and aggregate its features."""
    aggregator = FeatureAggregator(config, primitives)
    with aggregator.primitives.open_image(image_path) as img:
        if img is None:
            raise NotFoundError(f"Image not found: {image_path}")
        return aggregator.aggregate(img)
