# src/areacount/regression.py
"""Regression backends and the train/predict workflow on top of them."""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple
import logging
import numpy as np

from .features import FEATURE_NAMES, ImageFeatures, extract_features
from .exceptions import NotFoundError, InvalidArgumentError, ModelError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_PATH = "area_counter_model.joblib"

FeatureRecord = Tuple[ImageFeatures, float]
TrainingRecord = Tuple[str, float]


@dataclass
class ModelArtifact:
    """Opaque trained model; callers only pass it between train/save/load/predict."""

    estimator: Any
    feature_names: Tuple[str, ...] = FEATURE_NAMES
    n_samples: int = 0
    metadata: dict = field(default_factory=dict)


class RegressionBackend(ABC):
    """Train/predict contract for rectangle-count regressors."""

    @abstractmethod
    def train(self, records: Sequence[FeatureRecord]) -> ModelArtifact:
        ...

    @abstractmethod
    def predict(self, features: ImageFeatures, artifact: ModelArtifact) -> float:
        ...

    def save(self, artifact: ModelArtifact, path: str) -> None:
        import joblib
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        joblib.dump(artifact, str(p))

    def load(self, path: str) -> ModelArtifact:
        import joblib
        p = Path(path)
        if not p.exists():
            raise NotFoundError(f"Model file not found: {path}")
        artifact = joblib.load(str(p))
        if not isinstance(artifact, ModelArtifact):
            raise ModelError(f"Not an areacount model artifact: {path}")
        if tuple(artifact.feature_names) != FEATURE_NAMES:
            raise ModelError(
                f"Model was trained on features {artifact.feature_names}, expected {FEATURE_NAMES}"
            )
        return artifact


class GradientBoostingBackend(RegressionBackend):
    """Boosted regression trees (scikit-learn GradientBoostingRegressor)."""

    def __init__(self, n_estimators: int = 100, learning_rate: float = 0.1,
                 max_depth: int = 3, random_state: int = 42):
        self.n_estimators = int(n_estimators)
        self.learning_rate = float(learning_rate)
        self.max_depth = int(max_depth)
        self.random_state = random_state

    def _make_estimator(self):
        from sklearn.ensemble import GradientBoostingRegressor
        return GradientBoostingRegressor(
            n_estimators=self.n_estimators,
            learning_rate=self.learning_rate,
            max_depth=self.max_depth,
            random_state=self.random_state,
        )

    def train(self, records: Sequence[FeatureRecord]) -> ModelArtifact:
        if not records:
            raise InvalidArgumentError("Training data cannot be null or empty.")

        X = np.vstack([f.as_array() for f, _ in records]).astype(np.float64)
        y = np.array([float(label) for _, label in records], dtype=np.float64)

        est = self._make_estimator()
        est.fit(X, y)
        logger.debug("Fitted %s on %d samples", type(est).__name__, len(y))

        import sklearn
        return ModelArtifact(
            estimator=est,
            n_samples=int(len(y)),
            metadata={"library": "scikit-learn", "version": sklearn.__version__},
        )

    def predict(self, features: ImageFeatures, artifact: ModelArtifact) -> float:
        X = features.as_array().astype(np.float64).reshape(1, -1)
        return float(artifact.estimator.predict(X)[0])


class ModelTrainer:
    """Extract features per image, then train, persist, and query a backend."""

    def __init__(self,
                 backend: Optional[RegressionBackend] = None,
                 feature_fn: Optional[Callable[[str], ImageFeatures]] = None):
        self.backend = backend or GradientBoostingBackend()
        self.feature_fn = feature_fn or extract_features

    def build_records(self, training_data: Sequence[TrainingRecord]) -> List[FeatureRecord]:
        records: List[FeatureRecord] = []
        for image_path, label in training_data:
            records.append((self.feature_fn(image_path), float(label)))
        return records

    def train_and_save(self, training_data: Sequence[TrainingRecord],
                       model_path: str = DEFAULT_MODEL_PATH) -> ModelArtifact:
        """Train on (image_path, count) pairs and save the artifact to ``model_path``."""
        if not training_data:
            raise InvalidArgumentError("Training data cannot be null or empty.")
        records = self.build_records(training_data)
        artifact = self.backend.train(records)
        self.backend.save(artifact, model_path)
        logger.info("Model trained on %d image(s) and saved to %s", len(records), model_path)
        return artifact

    def predict_area_count(self, image_path: str,
                           model_path: str = DEFAULT_MODEL_PATH) -> float:
        """Predicted rectangle count for ``image_path`` (raw regressor output)."""
        artifact = self.backend.load(model_path)
        features = self.feature_fn(image_path)
        return self.backend.predict(features, artifact)
