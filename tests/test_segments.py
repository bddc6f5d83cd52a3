import numpy as np
import pytest

from discmaze.geometry import Point
from discmaze.segments import (
    RibbonSet,
    ribbon,
    ribbon_crossings,
    ribbon_sets_intersect,
    ribbons_intersect,
    segments_intersect,
    shrink_segment,
)


def P(x, y):
    return Point(float(x), float(y))


def test_collinear_disjoint_segments_do_not_intersect():
    assert not segments_intersect(P(0, 0), P(1, 0), P(2, 0), P(3, 0))


def test_proper_crossing_is_detected():
    assert segments_intersect(P(0, 0), P(1, 0), P(0.5, 1), P(0.5, -1))


def test_touching_endpoints_are_not_a_crossing():
    assert not segments_intersect(P(0, 0), P(1, 0), P(1, 0), P(1, 1))
    # T-junction: one endpoint lies on the other segment
    assert not segments_intersect(P(0, 0), P(2, 0), P(1, 0), P(1, 1))


def test_collinear_overlap_is_not_a_proper_crossing():
    assert not segments_intersect(P(0, 0), P(2, 0), P(1, 0), P(3, 0))


def test_shrink_segment_scales_toward_midpoint():
    a, b = shrink_segment(P(0, 0), P(4, 0), 0.5)
    assert a == P(1, 0)
    assert b == P(3, 0)

    same = shrink_segment(P(0, 0), P(4, 0), 1.0)
    assert same == (P(0, 0), P(4, 0))


def test_ribbon_builds_centre_and_two_offsets():
    centre, left, right = ribbon(P(0, 0), P(4, 0), 0.5, 0.5)

    assert centre == (P(1, 0), P(3, 0))
    assert left[0].y == pytest.approx(0.5)
    assert left[1].y == pytest.approx(0.5)
    assert right[0].y == pytest.approx(-0.5)
    assert (left[0].x, left[1].x) == pytest.approx((1.0, 3.0))


def test_shared_endpoint_is_not_a_ribbon_crossing_after_shrinking():
    first = (P(0, 0), P(1, 0))
    second = (P(1, 0), P(1, 1))

    assert not ribbons_intersect(first, second, tube_radius=0.05, shrink=0.5)


def test_ribbon_crossing_catches_near_misses_of_the_centre_lines():
    # centre lines stop short of each other but the tubes overlap
    first = (P(0, 0), P(10, 0))
    second = (P(5, 0.4), P(5, 10))

    assert not segments_intersect(*first, *second)
    assert ribbons_intersect(first, second, tube_radius=1.0, shrink=1.0)


def test_ribbon_crossing_detects_plain_crossing():
    first = (P(0, 0), P(10, 0))
    second = (P(5, -5), P(5, 5))

    assert ribbons_intersect(first, second, tube_radius=0.5, shrink=0.8)


def test_parallel_far_apart_ribbons_do_not_intersect():
    first = (P(0, 0), P(10, 0))
    second = (P(0, 5), P(10, 5))

    assert not ribbons_intersect(first, second, tube_radius=1.0, shrink=1.0)


def _random_ribbons(rng, count, tube_radius=1.5, shrink=0.6):
    ribbons = []
    for _ in range(count):
        a = P(*rng.uniform(-10.0, 10.0, size=2))
        b = a + P(*rng.uniform(-8.0, 8.0, size=2))
        ribbons.append(ribbon(a, b, tube_radius, shrink))
    return ribbons


def test_vectorised_crossings_agree_with_scalar_oracle():
    rng = np.random.default_rng(17)
    ribbons = _random_ribbons(rng, 60)
    stacked = np.asarray(ribbons, dtype=float)

    hits = 0
    for proposed in ribbons[:15]:
        mask = ribbon_crossings(np.asarray(proposed, dtype=float), stacked)
        expected = [ribbon_sets_intersect(proposed, other) for other in ribbons]
        assert mask.tolist() == expected
        hits += sum(expected)
    assert hits > 5


def test_vectorised_crossings_ignore_touching_and_collinear_lines():
    proposed = np.asarray(ribbon(P(0, 0), P(4, 0), 0.0, 1.0), dtype=float)
    accepted = np.asarray(
        [
            ribbon(P(4, 0), P(4, 3), 0.0, 1.0),
            ribbon(P(2, 0), P(6, 0), 0.0, 1.0),
            ribbon(P(2, -1), P(2, 1), 0.0, 1.0),
        ],
        dtype=float,
    )

    assert ribbon_crossings(proposed, accepted).tolist() == [False, False, True]


def test_ribbon_set_grows_past_its_initial_capacity():
    store = RibbonSet(capacity=1)
    assert not store.crosses(ribbon(P(0, 0), P(10, 0), 0.5, 0.8))

    for y in (0.0, 3.0, 6.0):
        store.add(ribbon(P(0, y), P(10, y), 0.5, 0.8))

    assert len(store) == 3
    assert store.lines().shape == (3, 3, 2, 2)
    assert store.crosses(ribbon(P(5, -2), P(5, 8), 0.5, 0.8))
    assert not store.crosses(ribbon(P(0, 10), P(10, 10), 0.5, 0.8))
