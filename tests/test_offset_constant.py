import math

import pytest

from polyline_offset import (
    COS_175,
    COS_179,
    DegenerateSegmentError,
    InvalidInputSizeError,
    Point2D,
    UTurnExceededError,
    UTurnPolicy,
    make_offset_directions,
    offset,
    offset_with_directions,
    offset_with_policy,
)


def _pts(*coords):
    return [Point2D(float(x), float(y)) for x, y in coords]


def _assert_points(actual, expected, abs_tol=1e-9):
    assert len(actual) == len(expected), f"{actual} != {expected}"
    for a, e in zip(actual, expected):
        assert math.isclose(a.x, e.x, abs_tol=abs_tol), f"{a} != {e}"
        assert math.isclose(a.y, e.y, abs_tol=abs_tol), f"{a} != {e}"


SQUARE = _pts((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
HAIRPIN = _pts((0, 0), (10, 0), (5, 0))


def _turn(angle_degrees, left=True):
    """Open polyline turning by angle_degrees at (10, 0)."""
    a = math.radians(180.0 - angle_degrees)
    y = 10.0 * math.sin(a)
    return _pts((0, 0), (10, 0), (10.0 - 10.0 * math.cos(a), y if left else -y))


def test_square_inward():
    _assert_points(offset(SQUARE, 1.0), _pts((1, 1), (9, 1), (9, 9), (1, 9), (1, 1)))


def test_square_outward():
    _assert_points(offset(SQUARE, -1.0), _pts((-1, -1), (11, -1), (11, 11), (-1, 11), (-1, -1)))


def test_clockwise_square_grows():
    cw = list(reversed(SQUARE))
    _assert_points(offset(cw, 1.0), _pts((-1, -1), (-1, 11), (11, 11), (11, -1), (-1, -1)))


def test_point_count_preserved_on_closed_loop():
    loop = _pts((0, 0), (6, 1), (8, 5), (3, 9), (-2, 4), (0, 0))
    for d in (0.5, -0.5, 2.0):
        res = offset(loop, d)
        assert len(res) == len(loop)
        assert res[0] == res[-1]


def test_offset_back_and_forth():
    loop = _pts((0, 0), (6, 1), (8, 5), (3, 9), (-2, 4), (0, 0))
    _assert_points(offset(offset(loop, 0.7), -0.7), loop)


def test_open_polyline():
    res = offset(_pts((0, 0), (10, 0), (10, 10)), 1.0)
    _assert_points(res, _pts((0, 1), (9, 1), (9, 10)))


def test_open_polyline_with_opposite_end_directions():
    # First and last segment run in opposite directions, this is no U-turn
    res = offset(_pts((0, 0), (10, 0), (10, 5), (0, 5)), 1.0)
    _assert_points(res, _pts((0, 1), (9, 1), (9, 4), (0, 4)))


def test_single_segment():
    _assert_points(offset(_pts((0, 0), (10, 0)), 2.0), _pts((0, 2), (10, 2)))


def test_zero_distance_closed_drops_closing_point():
    res = offset(SQUARE, 0.0)
    assert res == SQUARE[:-1]


def test_zero_distance_open_returns_copy():
    pts = _pts((0, 0), (10, 0), (10, 10))
    res = offset(pts, 1e-13)
    assert res == pts
    assert res is not pts


def test_input_is_not_modified():
    pts = list(SQUARE)
    offset(pts, 1.0)
    assert pts == SQUARE


def test_too_few_points():
    with pytest.raises(InvalidInputSizeError):
        offset(_pts((0, 0)), 1.0)


def test_degenerate_segment():
    with pytest.raises(DegenerateSegmentError):
        offset(_pts((0, 0), (0, 0), (1, 0)), 1.0)


def test_normal_count_mismatch():
    with pytest.raises(InvalidInputSizeError):
        offset_with_directions(SQUARE, make_offset_directions(SQUARE)[:-1], 1.0, UTurnPolicy.FAIL, COS_175)


def test_invalid_u_turn_cosine():
    with pytest.raises(ValueError):
        offset_with_policy(SQUARE, 1.0, UTurnPolicy.FAIL, 0.5)


def test_closed_u_turn_fails():
    with pytest.raises(UTurnExceededError) as exc_info:
        offset(_pts((0, 0), (5, 0), (0, 0)), 1.0)
    err = exc_info.value
    assert err.index == 0
    assert err.angle_degrees == pytest.approx(180.0)
    assert err.max_angle_degrees == pytest.approx(177.5)


def test_open_u_turn_fails():
    with pytest.raises(UTurnExceededError) as exc_info:
        offset(HAIRPIN, 1.0)
    assert exc_info.value.index == 1


def test_u_turn_threshold_defaults():
    # 176 degrees passes the 177.5 degree default of offset()
    res = offset(_turn(176.0), 1.0)
    assert len(res) == 3
    # but not the 175 degree default of offset_with_policy()
    with pytest.raises(UTurnExceededError):
        offset_with_policy(_turn(176.0), 1.0, UTurnPolicy.FAIL)
    # unless the threshold is raised
    res = offset_with_policy(_turn(176.0), 1.0, UTurnPolicy.FAIL, COS_179)
    _assert_points(res, offset(_turn(176.0), 1.0))


def test_u_turn_chamfer():
    res = offset_with_policy(HAIRPIN, 1.0, UTurnPolicy.CHAMFER)
    _assert_points(res, _pts((0, 1), (9, 1), (9, -1), (5, -1)))


def test_u_turn_skip():
    res = offset_with_policy(HAIRPIN, 1.0, UTurnPolicy.SKIP)
    _assert_points(res, _pts((0, 1), (5, -1)))


def test_u_turn_use_threshold():
    res = offset_with_policy(HAIRPIN, 1.0, UTurnPolicy.USE_THRESHOLD, COS_175)
    tip = 10.0 - 1.0 / math.sin(math.radians(2.5))
    _assert_points(res, [Point2D(0, 1), Point2D(tip, 0), Point2D(5, -1)])


def test_u_turn_policy_point_counts():
    chamfer = offset_with_policy(HAIRPIN, 1.0, UTurnPolicy.CHAMFER)
    threshold = offset_with_policy(HAIRPIN, 1.0, UTurnPolicy.USE_THRESHOLD)
    skip = offset_with_policy(HAIRPIN, 1.0, UTurnPolicy.SKIP)
    assert len(chamfer) == len(HAIRPIN) + 1
    assert len(threshold) == len(HAIRPIN)
    assert len(skip) == len(HAIRPIN) - 1
    assert len(chamfer) == len(skip) + 2
    assert len(chamfer) == len(threshold) + 1


def test_chamfer_on_outside_of_turn():
    # Right turn: the left offset is on the outside, the chamfer lies beyond the tip
    res = offset_with_policy(_turn(178.0, left=False), 1.0, UTurnPolicy.CHAMFER)
    assert len(res) == 4
    assert res[1].x > 10.0
    assert res[2].x > 10.0


def test_use_threshold_follows_turn_direction():
    inside = offset_with_policy(_turn(178.0, left=True), 1.0, UTurnPolicy.USE_THRESHOLD)
    outside = offset_with_policy(_turn(178.0, left=False), 1.0, UTurnPolicy.USE_THRESHOLD)
    assert inside[1].x < 10.0
    assert outside[1].x > 10.0
    # Both are clamped to the 175 degree miter length
    limit = 1.0 / math.sin(math.radians(2.5))
    assert Point2D(10, 0).distance_to(inside[1]) < limit + 1e-9
    assert Point2D(10, 0).distance_to(outside[1]) < limit + 1e-9


def test_unknown_policy():
    with pytest.raises(ValueError):
        offset_with_policy(HAIRPIN, 1.0, "chamfer")
