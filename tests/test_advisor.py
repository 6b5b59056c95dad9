import pytest

from areacount.advisor import suggest_threshold
from areacount.config import ThresholdConfig


@pytest.mark.parametrize(
    "path, expected",
    [
        ("Sample 3.png", 200),
        ("Sample 1.png", 240),
        ("Sample 2.jpg", 240),
        ("/scans/SAMPLE 3 - copy.PNG", 200),
        ("C:/Users/me/sample 3.bmp", 200),
        ("/data/Sample 3/grid.png", 240),  # only the file name is inspected
        ("Sample 30.png", 200),
    ],
)
def test_suggest_threshold(path, expected) -> None:
    assert suggest_threshold(path) == expected


def test_suggest_threshold_never_reads_the_file(tmp_path) -> None:
    # the file does not exist; the heuristic must still answer
    assert suggest_threshold(str(tmp_path / "Sample 3.png")) == 200


def test_custom_config() -> None:
    cfg = ThresholdConfig(dark_area_hint="dark", dark_area_threshold=180, light_area_threshold=230)
    assert suggest_threshold("very_DARK_board.png", cfg) == 180
    assert suggest_threshold("light_board.png", cfg) == 230


@pytest.mark.parametrize("path", [None, ""])
def test_missing_path_gets_light_default(path) -> None:
    assert suggest_threshold(path) == 240
