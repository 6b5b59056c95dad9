# src/areacount/analyzer.py
from __future__ import annotations
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence
import logging

from areacount.advisor import suggest_threshold
from areacount.config import ClassifierConfig, FeatureConfig, ThresholdConfig
from areacount.core.base import ImagingPrimitives, image_size
from areacount.core.image_utils import ImageProcessor
from areacount.detectors.binarizer import binarize, validate_threshold
from areacount.detectors.rectangles import RectangleClassifier
from areacount.exceptions import InvalidArgumentError, NotFoundError
from areacount.features import ImageFeatures, extract_features
from areacount.regression import DEFAULT_MODEL_PATH, ModelArtifact, ModelTrainer, RegressionBackend
from areacount.utils.visualization import VisualizationUtils


class CountResult(NamedTuple):
    success: bool
    count: int


class AreaCounter:
    """
    Main analyzer with:
    - Rectangle counting (binarize, contour tree, geometric rules)
    - Feature extraction for the regression model
    - Training and prediction through a pluggable regression backend

    The heuristic count and the regression prediction are separate
    outputs; nothing here combines them.
    """

    def __init__(self,
                 classifier_config: Optional[ClassifierConfig] = None,
                 feature_config: Optional[FeatureConfig] = None,
                 threshold_config: Optional[ThresholdConfig] = None,
                 primitives: Optional[ImagingPrimitives] = None,
                 regression_backend: Optional[RegressionBackend] = None,
                 logger: Optional[logging.Logger] = None):
        self.classifier_config = classifier_config or ClassifierConfig()
        self.feature_config = feature_config or FeatureConfig()
        self.threshold_config = threshold_config or ThresholdConfig()
        self.primitives = primitives or ImageProcessor()
        self.regression_backend = regression_backend
        self.log = logger or logging.getLogger(__name__)

    # -----------------------------
    # Heuristic count
    # -----------------------------
    def _validate_inputs(self, image_path: str, threshold: int) -> int:
        if image_path is None or not str(image_path).strip():
            raise InvalidArgumentError("Image path cannot be null or empty.")
        if not Path(image_path).is_file():
            raise NotFoundError(f"Image file not found at the specified path: {image_path}")
        return validate_threshold(threshold)

    def count_areas(self, image_path: str, threshold: int,
                    show_steps: bool = False, draw_contours: bool = False,
                    save_path: Optional[str] = None) -> CountResult:
        """
        Count rectangles in ``image_path``.

        Raises InvalidArgumentError / NotFoundError for bad inputs before the
        image is touched. An existing file that fails to decode is a soft
        failure and returns ``CountResult(False, -1)``.
        """
        threshold = self._validate_inputs(image_path, threshold)
        self.classifier_config.validate()

        with self.primitives.open_image(image_path) as gray:
            if gray is None:
                self.log.error("Failed to load or decode image: %s", image_path)
                return CountResult(False, -1)

            binary = binarize(gray, threshold, self.primitives)

            if show_steps:
                VisualizationUtils.show_window("1. Grayscale Input", gray)
                VisualizationUtils.show_window(f"2. Binary (Threshold: {threshold})", binary)

            contours, hierarchy = self.primitives.find_contours(binary, hierarchy=True)
            width, height = image_size(gray)

            classifier = RectangleClassifier(self.classifier_config, self.primitives)
            rects = classifier.rectangles(contours, width, height)
            count = len(rects)
            self.log.debug("%d contour(s) traced, %d rectangle(s) accepted", len(contours), count)

        if draw_contours:
            VisualizationUtils.draw_contours(image_path, contours, hierarchy)

        if save_path:
            try:
                VisualizationUtils.annotate_rectangles(image_path, rects, save_path)
                self.log.info("Annotated image saved to: %s", save_path)
            except Exception as e:
                self.log.warning("Could not save annotated image to %s: %s", save_path, e)

        return CountResult(True, count)

    def suggest_threshold(self, image_path: str) -> int:
        return suggest_threshold(image_path, self.threshold_config)

    # -----------------------------
    # Regression features / model
    # -----------------------------
    def extract_features(self, image_path: str) -> ImageFeatures:
        """Feature vector for ``image_path``; NotFoundError if it cannot be decoded."""
        self.feature_config.validate()
        return extract_features(image_path, self.feature_config, self.primitives)

    def _trainer(self) -> ModelTrainer:
        return ModelTrainer(self.regression_backend, feature_fn=self.extract_features)

    def train(self, images: Sequence[str], labels: Sequence[float],
              model_path: str = DEFAULT_MODEL_PATH) -> ModelArtifact:
        """Train on images paired with their ground-truth rectangle counts."""
        images, labels = list(images), list(labels)
        if not images or not labels:
            raise InvalidArgumentError("Training data cannot be null or empty.")
        if len(images) != len(labels):
            raise InvalidArgumentError(
                f"The number of images and labels must match ({len(images)} != {len(labels)})."
            )
        training_data: List = list(zip(images, (float(l) for l in labels)))
        return self._trainer().train_and_save(training_data, model_path)

    def predict(self, image_path: str, model_path: str = DEFAULT_MODEL_PATH) -> float:
        """Raw regression output for ``image_path``."""
        return self._trainer().predict_area_count(image_path, model_path)
