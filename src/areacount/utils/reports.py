from __future__ import annotations
from typing import Dict, Any, List
import json
from pathlib import Path
import time
import sys
import csv

from areacount.__version__ import __version__
from areacount.features import FEATURE_NAMES


class ReportUtils:
    @staticmethod
    def to_json(path: str, payload: Dict[str, Any]) -> None:
        out = {
            **payload,
            "metadata": {
                "library": "areacount",
                "version": __version__,
                "generated_at": time.strftime("%Y-%m-%d %H:%M:%S"),
                "python_version": f"{sys.version_info.major}.{sys.version_info.minor}",
            },
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(out, f, ensure_ascii=False, indent=2)

    @staticmethod
    def features_to_csv(rows: List[Dict[str, Any]], output_path: str) -> None:
        """One row per image: ``image`` followed by the feature columns."""
        if not rows:
            Path(output_path).write_text("", encoding="utf-8")
            return
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["image", *FEATURE_NAMES])
            for r in rows:
                w.writerow(
                    [Path(r["image"]).name]
                    + [f"{float(r[name]):.6f}" for name in FEATURE_NAMES]
                )
