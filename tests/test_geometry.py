import math

import pytest

from qix.geometry import Rect, bounding_box, distance, polyline_length


def test_distance_is_euclidean():
    assert distance((0, 0), (3, 4)) == 5.0
    assert distance((1.5, -2), (1.5, -2)) == 0.0


def test_distance_is_symmetric():
    assert distance((10, 20), (-5, 7)) == distance((-5, 7), (10, 20))


def test_polyline_length_sums_segments():
    points = [(0, 0), (3, 4), (3, 10), (0, 10)]
    assert polyline_length(points) == pytest.approx(5 + 6 + 3)


@pytest.mark.parametrize("points", [[], [(7, 7)]])
def test_polyline_length_of_degenerate_lines_is_zero(points):
    assert polyline_length(points) == 0


def test_polyline_length_diagonal():
    assert polyline_length([(0, 0), (1, 1)]) == pytest.approx(math.sqrt(2))


def test_bounding_box():
    box = bounding_box([(100, 430), (200, 500), (150, 420)])
    assert box == Rect(100, 420, 100, 80)
    assert box.area == 8000
    assert box.right == 200
    assert box.bottom == 500


def test_bounding_box_requires_points():
    with pytest.raises(ValueError):
        bounding_box([])
