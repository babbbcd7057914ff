import pytest

from polyline_offset import CollinearPolicy, Polyline2D, UTurnExceededError, UTurnPolicy

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]


def _assert_tuples(actual, expected):
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e)


def test_from_tuples_and_properties():
    poly = Polyline2D.from_tuples(SQUARE)
    assert len(poly) == 5
    assert poly.segment_count == 4
    assert poly.is_closed
    assert poly.signed_area() == pytest.approx(100.0)
    assert poly.is_ccw()
    assert not poly.reversed().is_ccw()
    assert poly.as_tuples()[1] == (10.0, 0.0)


def test_open_polyline_is_not_closed():
    poly = Polyline2D.from_tuples([(0, 0), (10, 0), (10, 10)])
    assert not poly.is_closed


def test_offset_returns_new_polyline():
    poly = Polyline2D.from_tuples(SQUARE)
    inner = poly.offset(1.0)
    _assert_tuples(inner.as_tuples(), [(1, 1), (9, 1), (9, 9), (1, 9), (1, 1)])
    assert poly.as_tuples() == [(float(x), float(y)) for x, y in SQUARE]


def test_offset_reversed_grows():
    outer = Polyline2D.from_tuples(SQUARE).reversed().offset(1.0)
    xs = [p[0] for p in outer.as_tuples()]
    assert min(xs) == pytest.approx(-1.0)
    assert max(xs) == pytest.approx(11.0)


def test_offset_with_policy():
    poly = Polyline2D.from_tuples([(0, 0), (10, 0), (5, 0)])
    with pytest.raises(UTurnExceededError):
        poly.offset(1.0)
    skipped = poly.offset(1.0, u_turn_policy=UTurnPolicy.SKIP)
    _assert_tuples(skipped.as_tuples(), [(0, 1), (5, -1)])


def test_offset_variable():
    poly = Polyline2D.from_tuples([(0, 0), (5, 0), (10, 0)])
    res = poly.offset_variable([1.0, 2.0], collinear_policy=CollinearPolicy.PROPORTIONAL)
    _assert_tuples(res.as_tuples(), [(0, 1), (5, 1.5), (10, 2)])
