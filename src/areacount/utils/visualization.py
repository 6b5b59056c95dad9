# src/areacount/utils/visualization.py
from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import os
import random
import sys

import numpy as np
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

CONTOURS_WINDOW = "3. Detected Contours"

_COLORS = [
    (255, 0, 0),
    (0, 200, 0),
    (0, 0, 255),
    (255, 200, 0),
    (255, 0, 255),
    (0, 200, 200),
    (255, 128, 0),
    (128, 0, 255),
]


def _gui_available() -> bool:
    """False where OpenCV's HighGUI would abort the process (Linux without a display)."""
    if sys.platform.startswith("linux"):
        return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))
    return True


def _load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype("arial.ttf", size)
    except OSError:
        return ImageFont.load_default()


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> tuple:
    tb = draw.textbbox((0, 0), text, font=font)
    return tb[2] - tb[0], tb[3] - tb[1]


class VisualizationUtils:
    """
    Optional debugging output. Nothing here may affect a count: without a
    display nothing is opened, and GUI errors are logged and swallowed.
    """

    @staticmethod
    def show_window(window_name: str, image: np.ndarray) -> bool:
        """Display ``image`` in an OpenCV window; False if no GUI is available."""
        if not _gui_available():
            logger.warning("Could not display window '%s': no display available. "
                           "Ensure a GUI environment is available for visualization.",
                           window_name)
            return False
        try:
            import cv2
            cv2.imshow(window_name, image)
            cv2.waitKey(1)
            return True
        except Exception as e:
            logger.warning("Could not display window '%s': %s. "
                           "Ensure a GUI environment is available for visualization.",
                           window_name, e)
            return False

    @staticmethod
    def wait_for_key() -> None:
        """Block until a key is pressed in any open window. No-op without a GUI."""
        if not _gui_available():
            return
        logger.info("Press any key in an image window to continue.")
        try:
            import cv2
            cv2.waitKey(0)
        except Exception as e:
            logger.debug("waitKey failed: %s", e)

    @staticmethod
    def draw_contours(image_path: str, contours: Sequence[np.ndarray],
                      hierarchy: Optional[np.ndarray] = None, wait: bool = True) -> Optional[np.ndarray]:
        """Draw every contour in a random color on the color image and show it."""
        try:
            import cv2
            color_img = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
            if color_img is None:
                logger.warning("Could not reload the original image in color for drawing contours.")
                return None

            logger.info("Drawing detected contours on image...")
            for i in range(len(contours)):
                color = tuple(random.randint(0, 255) for _ in range(3))
                cv2.drawContours(color_img, contours, i, color, thickness=2,
                                 lineType=cv2.LINE_8, hierarchy=hierarchy)
        except Exception as e:
            logger.warning("Could not draw contours: %s", e)
            return None

        if VisualizationUtils.show_window(CONTOURS_WINDOW, color_img) and wait:
            logger.info("Press any key in the '%s' window to close it.", CONTOURS_WINDOW)
            try:
                cv2.waitKey(0)
                cv2.destroyWindow(CONTOURS_WINDOW)
            except Exception as e:
                logger.debug("Window teardown failed: %s", e)
        return color_img

    @staticmethod
    def destroy_all_windows() -> None:
        """Close all OpenCV windows. Safe to call in headless mode."""
        if not _gui_available():
            return
        try:
            import cv2
            cv2.destroyAllWindows()
        except Exception as e:
            logger.debug("Exception during destroyAllWindows (may be normal if no GUI): %s", e)

    @staticmethod
    def annotate_rectangles(
        image_path: str,
        polygons: Sequence[np.ndarray],
        out_path: Optional[str] = None,
        line_width: int = 2,
        show_count: bool = True,
        font_size: int = 18,
    ) -> Image.Image:
        """Outline accepted rectangles with index labels and a total banner."""
        img = Image.open(image_path).convert("RGB")
        draw = ImageDraw.Draw(img)
        W, H = img.size

        font = _load_font(font_size)
        font_big = _load_font(font_size + 8)
        pad = 4

        for i, poly in enumerate(polygons):
            pts: List[tuple] = [(int(p[0]), int(p[1])) for p in np.asarray(poly).reshape(-1, 2)]
            if len(pts) < 3:
                continue
            color = _COLORS[i % len(_COLORS)]
            draw.line(pts + [pts[0]], fill=color, width=line_width)

            if show_count:
                label = str(i + 1)
                tw, th = _text_size(draw, label, font)
                x0 = min(p[0] for p in pts)
                y0 = min(p[1] for p in pts)
                # label above the shape when it fits, else just inside
                text_y0 = y0 - th - 2 * pad if y0 - th - 2 * pad >= 0 else y0 + 2
                text_x0 = max(0, min(x0, W - tw - 2 * pad))
                text_y0 = max(0, min(text_y0, H - th - 2 * pad))
                draw.rectangle([text_x0, text_y0, text_x0 + tw + 2 * pad, text_y0 + th + 2 * pad], fill=color)
                draw.text((text_x0 + pad, text_y0 + pad), label, fill=(255, 255, 255), font=font)

        if show_count:
            txt = f"Total: {len(polygons)}"
            tw2, th2 = _text_size(draw, txt, font_big)
            draw.rectangle([0, 0, tw2 + 2 * pad, th2 + 2 * pad], fill=(0, 0, 0))
            draw.text((pad, pad), txt, fill=(255, 255, 255), font=font_big)

        if out_path:
            img.save(out_path, quality=95)
        return img
