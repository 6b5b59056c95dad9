# src/areacount/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from areacount.__version__ import __version__
from areacount.api import (
    count_areas,
    extract_features,
    predict_count,
    suggest_threshold,
    train_model,
)
from areacount.exceptions import AreaCountError
from areacount.regression import DEFAULT_MODEL_PATH
from areacount.utils.reports import ReportUtils
from areacount.utils.visualization import VisualizationUtils

logger = logging.getLogger("areacount.cli")


# -----------------------------
# Helpers
# -----------------------------
def _setup_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stderr, force=True)


def _threshold_arg(s: str) -> int:
    try:
        return int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"threshold must be an integer, got {s!r}")


# -----------------------------
# Sub-commands
# -----------------------------
def _cmd_count(args: argparse.Namespace) -> int:
    image = args.image_path
    logger.info("--- Image Area Counter ---")
    logger.info("Processing image: %s", Path(image).resolve())

    if args.threshold is not None:
        threshold = args.threshold
        logger.info("Using provided threshold: %d", threshold)
    else:
        threshold = suggest_threshold(image)

    exit_code = 1
    try:
        logger.info("Starting analysis...")
        success, count = count_areas(
            image,
            threshold,
            show_steps=args.show_steps,
            draw_contours=args.draw_contours,
            save_path=args.save,
        )
        if success:
            print(f"Analysis Complete: Detected {count} areas.")
            exit_code = 0
        else:
            logger.warning("Analysis finished, but reported an issue during processing.")

        if args.report:
            ReportUtils.to_json(args.report, {
                "image": str(image),
                "threshold": threshold,
                "success": bool(success),
                "count": int(count),
            })
            logger.info("Report saved to: %s", args.report)
    except FileNotFoundError as e:
        logger.error("File Error: %s", e)
    except ValueError as e:
        logger.error("Argument Error: %s", e)
    except Exception as e:
        logger.error("An unexpected error occurred: %s", e)
        logger.debug("Details", exc_info=True)
    finally:
        if args.show_steps:
            VisualizationUtils.wait_for_key()
        if args.show_steps or args.draw_contours:
            VisualizationUtils.destroy_all_windows()
        logger.info("Processing finished.")

    return exit_code


def _cmd_train(args: argparse.Namespace) -> int:
    if len(args.images) != len(args.labels):
        logger.error("The number of images and labels must match.")
        return 1
    try:
        train_model(args.images, args.labels, args.model)
    except (AreaCountError, FileNotFoundError, ValueError) as e:
        logger.error("Training failed: %s", e)
        return 1
    print(f"Model trained and saved to {args.model}")
    return 0


def _cmd_predict(args: argparse.Namespace) -> int:
    try:
        pred = predict_count(args.image, args.model)
    except (AreaCountError, FileNotFoundError, ValueError) as e:
        logger.error("Prediction failed: %s", e)
        return 1
    print(f"Predicted rectangle count: {round(pred)} (raw: {pred:.2f})")
    return 0


def _cmd_features(args: argparse.Namespace) -> int:
    rows: List[Dict[str, Any]] = []
    failed = 0
    for p in args.images:
        try:
            f = extract_features(p)
        except (AreaCountError, FileNotFoundError) as e:
            logger.error("ERROR: %s: %s", Path(p).name, e)
            failed += 1
            continue
        rows.append({"image": p, **f.as_dict()})
        pretty = "  ".join(f"{k}={v:.4f}" for k, v in f.as_dict().items())
        print(f"{Path(p).name}: {pretty}")

    if args.output:
        ReportUtils.features_to_csv(rows, args.output)
        logger.info("Features saved to: %s", args.output)
    return 1 if failed else 0


# -----------------------------
# CLI
# -----------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="areacount",
        description="Count rectangular areas in an image with contour heuristics or a trained regressor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Heuristic count, threshold suggested from the file name
  areacount count "Sample 1.png"

  # Explicit threshold and annotated output
  areacount count "Sample 3.png" --threshold 200 --save annotated.png

  # Train and use the regression model
  areacount train --images a.png b.png --labels 2 5
  areacount predict --image c.png
        """,
    )
    parser.add_argument("--version", action="version", version=f"areacount version {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print results and errors")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("count", help="Count rectangles with the geometric pipeline")
    p.add_argument("image_path", metavar="image-path", help="Path to the input image file")
    p.add_argument("--threshold", type=_threshold_arg,
                   help="Grayscale threshold (0-255). If omitted, suggested from the filename.")
    p.add_argument("--show-steps", action="store_true",
                   help="Display intermediate grayscale and binary images (requires GUI)")
    p.add_argument("--draw-contours", action="store_true",
                   help="Display the image with detected contours highlighted (requires GUI)")
    p.add_argument("--save", help="Save an annotated copy with the accepted rectangles")
    p.add_argument("--report", help="Write a JSON report")
    p.set_defaults(func=_cmd_count)

    p = sub.add_parser("train", help="Train the regression model with labeled images")
    p.add_argument("--images", nargs="+", required=True, help="Image paths for training")
    p.add_argument("--labels", nargs="+", type=float, required=True,
                   help="Number of rectangles in each image")
    p.add_argument("--model", default=DEFAULT_MODEL_PATH,
                   help=f"Model output path (default: {DEFAULT_MODEL_PATH})")
    p.set_defaults(func=_cmd_train)

    p = sub.add_parser("predict", help="Predict the rectangle count for an image")
    p.add_argument("--image", required=True, help="Image path to predict")
    p.add_argument("--model", default=DEFAULT_MODEL_PATH,
                   help=f"Trained model path (default: {DEFAULT_MODEL_PATH})")
    p.set_defaults(func=_cmd_predict)

    p = sub.add_parser("features", help="Print the regression features of images")
    p.add_argument("images", nargs="+", help="Image file(s)")
    p.add_argument("--output", "-o", help="Write features to CSV")
    p.set_defaults(func=_cmd_features)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.quiet)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
