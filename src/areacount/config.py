# src/areacount/config.py
from dataclasses import dataclass

from .exceptions import ConfigurationError


@dataclass
class ClassifierConfig:
    """Acceptance rules for rectangle candidates."""

    # Polygon approximation tolerance, as a fraction of the contour perimeter
    approx_epsilon_factor: float = 0.02
    vertex_count: int = 4

    # Noise floor (px^2)
    min_rect_area: float = 1000.0

    # Full-frame border exclusion
    edge_margin: int = 5

    def validate(self) -> None:
        """Validate configuration parameters."""
        if not (0.0 < self.approx_epsilon_factor < 1.0):
            raise ConfigurationError("approx_epsilon_factor must be in (0, 1)")
        if self.vertex_count < 3:
            raise ConfigurationError("vertex_count must be >= 3")
        if self.min_rect_area < 0:
            raise ConfigurationError("min_rect_area must be >= 0")
        if self.edge_margin < 0:
            raise ConfigurationError("edge_margin must be >= 0")


@dataclass
class FeatureConfig:
    """Parameters of the regression feature branch."""

    # Canny hysteresis thresholds
    canny_low: int = 100
    canny_high: int = 200

    # Fixed binarization, targets dark lines
    binary_threshold: int = 200

    # Contours at or below this area are left out of the statistics
    min_contour_area: float = 100.0

    def validate(self) -> None:
        """Validate feature configuration."""
        if self.canny_low < 0 or self.canny_high < 0:
            raise ConfigurationError("canny thresholds must be >= 0")
        if self.canny_low > self.canny_high:
            raise ConfigurationError("canny_low must be <= canny_high")
        if not (0 <= self.binary_threshold <= 255):
            raise ConfigurationError("binary_threshold must be in [0, 255]")
        if self.min_contour_area < 0:
            raise ConfigurationError("min_contour_area must be >= 0")


@dataclass
class ThresholdConfig:
    """Filename heuristic for the default binarization threshold."""

    dark_area_hint: str = "Sample 3"
    dark_area_threshold: int = 200
    light_area_threshold: int = 240
    max_pixel_value: int = 255

    def validate(self) -> None:
        if not self.dark_area_hint:
            raise ConfigurationError("dark_area_hint cannot be empty")
        for name in ("dark_area_threshold", "light_area_threshold"):
            value = getattr(self, name)
            if not (0 <= value <= self.max_pixel_value):
                raise ConfigurationError(f"{name} must be in [0, {self.max_pixel_value}]")
