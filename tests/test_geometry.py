import dataclasses
import math

import pytest

from polyline_offset.errors import DegenerateSegmentError, OffsetError
from polyline_offset.models.geometry import Line2D, Point2D


def test_vector_arithmetic():
    a = Point2D(1.0, 2.0)
    b = Point2D(3.0, 4.0)
    assert a + b == Point2D(4.0, 6.0)
    assert b - a == Point2D(2.0, 2.0)
    assert a * 2.0 == Point2D(2.0, 4.0)
    assert 2.0 * a == Point2D(2.0, 4.0)
    assert b / 2.0 == Point2D(1.5, 2.0)
    assert -a == Point2D(-1.0, -2.0)


def test_dot_cross_length():
    assert Point2D(1.0, 2.0).dot(Point2D(3.0, 4.0)) == 11.0
    assert Point2D(1.0, 0.0).cross(Point2D(0.0, 1.0)) == 1.0
    assert Point2D(0.0, 1.0).cross(Point2D(1.0, 0.0)) == -1.0
    assert Point2D(3.0, 4.0).length == 5.0
    assert Point2D(3.0, 4.0).length_sq == 25.0
    assert Point2D(1.0, 1.0).distance_to(Point2D(4.0, 5.0)) == 5.0


def test_unitized():
    u = Point2D(3.0, 4.0).unitized()
    assert math.isclose(u.x, 0.6)
    assert math.isclose(u.y, 0.8)


def test_unitized_zero_vector_raises():
    with pytest.raises(DegenerateSegmentError):
        Point2D(0.0, 0.0).unitized()


def test_rotations():
    v = Point2D(1.0, 0.0)
    assert v.rotate90_ccw() == Point2D(0.0, 1.0)
    assert v.rotate90_cw() == Point2D(0.0, -1.0)

    r = v.rotate_by(0.0, 1.0)
    assert r.x == pytest.approx(0.0)
    assert r.y == pytest.approx(1.0)

    r = v.rotate_by(0.0, -1.0)
    assert r.y == pytest.approx(-1.0)


def test_point_is_immutable():
    p = Point2D(1.0, 2.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.x = 5.0


def test_line_evaluate_and_project():
    line = Line2D(Point2D(0.0, 0.0), Point2D(10.0, 0.0))
    assert line.vector == Point2D(10.0, 0.0)
    assert line.length == 10.0
    assert line.evaluate_at(0.5) == Point2D(5.0, 0.0)
    assert line.evaluate_at(1.5) == Point2D(15.0, 0.0)
    assert line.ray_closest_parameter(Point2D(5.0, 3.0)) == pytest.approx(0.5)
    assert line.ray_closest_parameter(Point2D(20.0, -1.0)) == pytest.approx(2.0)


def test_line_too_short_to_project():
    line = Line2D(Point2D(1.0, 1.0), Point2D(1.0, 1.0))
    with pytest.raises(OffsetError):
        line.ray_closest_parameter(Point2D(0.0, 0.0))
