import pytest

from areacount.config import ClassifierConfig
from areacount.core.base import as_points
from areacount.core.geometry import touches_all_borders
from areacount.detectors.rectangles import RectangleClassifier, classify_rectangles

W, H = 200, 200


def _square(x, y, side):
    return as_points([(x, y), (x + side, y), (x + side, y + side), (x, y + side)])


def test_empty_contour_list_counts_zero() -> None:
    assert classify_rectangles([], W, H) == 0


def test_centered_square_is_counted() -> None:
    assert classify_rectangles([_square(50, 50, 100)], W, H) == 1


def test_full_frame_border_is_excluded() -> None:
    frame = as_points([(0, 0), (0, H - 1), (W - 1, H - 1), (W - 1, 0)])
    assert classify_rectangles([frame], W, H) == 0


def test_near_frame_within_margin_is_excluded() -> None:
    frame = as_points([(4, 3), (4, H - 4), (W - 5, H - 4), (W - 5, 3)])
    assert classify_rectangles([frame], W, H) == 0


def test_touching_three_edges_is_still_counted() -> None:
    top_band = as_points([(0, 0), (W - 1, 0), (W - 1, 100), (0, 100)])
    assert classify_rectangles([top_band], W, H) == 1


def test_area_floor_rejects_small_and_degenerate_shapes() -> None:
    small = _square(10, 10, 20)  # area 400
    flat = as_points([(10, 10), (120, 10), (120, 10), (10, 10)])
    assert classify_rectangles([small, flat], W, H) == 0


def test_area_floor_is_strict() -> None:
    # 40 x 25 = exactly 1000
    exact = as_points([(20, 20), (60, 20), (60, 45), (20, 45)])
    assert classify_rectangles([exact], W, H) == 0
    assert classify_rectangles([exact], W, H, config=ClassifierConfig(min_rect_area=999)) == 1


def test_non_quadrilaterals_are_rejected() -> None:
    triangle = as_points([(20, 150), (100, 20), (180, 150)])
    hexagon = as_points([(60, 40), (140, 40), (180, 100), (140, 160), (60, 160), (20, 100)])
    assert classify_rectangles([triangle, hexagon], W, H) == 0


def test_concave_quadrilateral_is_rejected() -> None:
    dart = as_points([(50, 50), (150, 100), (50, 150), (80, 100)])
    assert classify_rectangles([dart], W, H) == 0


def test_count_is_order_insensitive() -> None:
    contours = [
        _square(10, 10, 50),
        _square(120, 120, 60),
        _square(10, 10, 15),
        as_points([(0, 0), (0, H - 1), (W - 1, H - 1), (W - 1, 0)]),
    ]
    assert classify_rectangles(contours, W, H) == 2
    assert classify_rectangles(list(reversed(contours)), W, H) == 2


def test_rectangles_returns_four_vertex_polygons() -> None:
    clf = RectangleClassifier()
    polys = clf.rectangles([_square(50, 50, 100)], W, H)
    assert len(polys) == 1
    assert len(polys[0]) == 4


@pytest.mark.parametrize(
    "rect, expected",
    [
        ((0, 0, 200, 200), True),
        ((5, 5, 190, 190), True),
        ((6, 0, 194, 200), False),
        ((0, 0, 200, 194), False),
        ((50, 50, 100, 100), False),
    ],
)
def test_touches_all_borders(rect, expected) -> None:
    assert touches_all_borders(rect, 200, 200, margin=5) is expected
