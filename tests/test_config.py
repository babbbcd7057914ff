import math

import pytest

from polyline_offset import (
    COS_175,
    COS_177_5,
    COS_179,
    COS_2_5,
    DEFAULT_CONFIG,
    CollinearPolicy,
    OffsetConfig,
    Point2D,
    UTurnPolicy,
    offset_with_config,
)


def _pts(*coords):
    return [Point2D(float(x), float(y)) for x, y in coords]


def test_cosine_constants():
    assert COS_175 == pytest.approx(-0.9961946980917455)
    assert COS_177_5 == pytest.approx(-0.9990482215818578)
    assert COS_179 == pytest.approx(-0.9998476951563913)
    assert COS_2_5 == pytest.approx(0.9990482215818578)


def test_default_config():
    assert DEFAULT_CONFIG.u_turn_policy is UTurnPolicy.FAIL
    assert DEFAULT_CONFIG.collinear_policy is CollinearPolicy.FAIL
    assert DEFAULT_CONFIG.u_turn_cosine == COS_177_5
    assert DEFAULT_CONFIG.collinear_cosine == COS_2_5


def test_policy_values():
    assert UTurnPolicy("chamfer") is UTurnPolicy.CHAMFER
    assert CollinearPolicy("step_with_two_points") is CollinearPolicy.STEP_WITH_TWO_POINTS


@pytest.mark.parametrize("kwargs", [
    {"u_turn_policy": "skip"},
    {"collinear_policy": "project"},
    {"u_turn_cosine": 0.5},
    {"u_turn_cosine": -1.0},
    {"collinear_cosine": 1.0},
    {"collinear_cosine": -0.1},
])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        OffsetConfig(**kwargs)


def test_offset_with_config_constant():
    hairpin = _pts((0, 0), (10, 0), (5, 0))
    res = offset_with_config(hairpin, 1.0, OffsetConfig(u_turn_policy=UTurnPolicy.SKIP))
    assert [p.as_tuple() for p in res] == [pytest.approx((0, 1)), pytest.approx((5, -1))]


def test_offset_with_config_integer_distance():
    square = _pts((0, 0), (10, 0), (10, 10), (0, 10), (0, 0))
    res = offset_with_config(square, 1)
    assert res[1].as_tuple() == pytest.approx((9.0, 1.0))


def test_offset_with_config_variable():
    config = OffsetConfig(collinear_policy=CollinearPolicy.PROPORTIONAL)
    res = offset_with_config(_pts((0, 0), (5, 0), (10, 0)), [1.0, 2.0], config)
    assert res[1].as_tuple() == pytest.approx((5.0, 1.5))


def test_offset_with_config_uses_thresholds():
    a = math.radians(4.0)
    turn = _pts((0, 0), (10, 0), (10 - 10 * math.cos(a), 10 * math.sin(a)))
    # 176 degrees is fine at the 177.5 default, chamfered at 175
    assert len(offset_with_config(turn, 1.0)) == 3
    config = OffsetConfig(u_turn_policy=UTurnPolicy.CHAMFER, u_turn_cosine=COS_175)
    assert len(offset_with_config(turn, 1.0, config)) == 4
