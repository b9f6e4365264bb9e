import math

import pytest

from visionboard import Card, QuadraticCurve, connection_path, iter_links


def _card(card_id, x, y, connections=()):
    return Card(id=card_id, kind="identity", label=card_id, x=x, y=y, connections=list(connections))


def test_control_point_bends_along_unit_normal():
    curve = connection_path(_card("a", 0.0, 0.0), _card("b", 100.0, 0.0), 0.0)

    assert curve.start == (0.0, 0.0)
    assert curve.end == (100.0, 0.0)
    assert curve.control == pytest.approx((50.0, 5.0))


def test_wave_term_adds_to_offset():
    peak_ms = (math.pi / 2.0) / 0.0006

    curve = connection_path(_card("a", 0.0, 0.0), _card("b", 0.0, 200.0), peak_ms)

    # normal of a downward segment points towards -x
    assert curve.control == pytest.approx((-(10.0 + 8.0), 100.0))


def test_reversed_endpoints_bend_to_the_other_side():
    a, b = _card("a", 10.0, 20.0), _card("b", 310.0, 420.0)

    forward = connection_path(a, b, 0.0)
    backward = connection_path(b, a, 0.0)

    mid = (160.0, 220.0)
    assert forward.control[0] - mid[0] == pytest.approx(-(backward.control[0] - mid[0]))
    assert forward.control[1] - mid[1] == pytest.approx(-(backward.control[1] - mid[1]))


@pytest.mark.parametrize("time_ms", [0.0, 1234.5, 1e9])
def test_coincident_endpoints_give_finite_curve(time_ms):
    a = _card("a", 42.0, 17.0)

    curve = connection_path(a, a, time_ms)

    for x, y in curve.points():
        assert math.isfinite(x) and math.isfinite(y)
    assert curve.control == (42.0, 17.0)


def test_svg_path_format():
    curve = QuadraticCurve((0.0, 0.0), (50.0, 5.0), (100.0, 0.5))

    assert curve.to_svg_path() == "M 0 0 Q 50 5 100 0.5"


def test_iter_links_deduplicates_and_skips_dangling_entries():
    a = _card("a", 0.0, 0.0, ["b"])
    b = _card("b", 1.0, 0.0, ["a", "ghost"])
    c = _card("c", 2.0, 0.0, ["a", "c"])

    pairs = [(frm.id, to.id) for frm, to in iter_links([a, b, c])]

    assert pairs == [("a", "b"), ("c", "a")]
