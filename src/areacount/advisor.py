# src/areacount/advisor.py
from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging

from .config import ThresholdConfig

logger = logging.getLogger(__name__)


def suggest_threshold(image_path: Optional[str], config: Optional[ThresholdConfig] = None) -> int:
    """
    Suggest a binarization threshold from the file name alone.

    Names containing the dark-area hint (case-insensitive) get the lower
    threshold, everything else the light-area one. The image is never read.
    """
    cfg = config or ThresholdConfig()
    name = Path(image_path).name if image_path else ""
    if name and cfg.dark_area_hint.lower() in name.lower():
        logger.info("Filename contains '%s'. Suggesting lower threshold (%d) for dark areas.",
                    cfg.dark_area_hint, cfg.dark_area_threshold)
        return cfg.dark_area_threshold
    logger.info("Suggesting higher threshold (%d) for light areas.", cfg.light_area_threshold)
    return cfg.light_area_threshold
