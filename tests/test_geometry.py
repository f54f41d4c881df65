import pytest

from ocrlayout.layout.geometry import (
    horizontal_overlap_ratio,
    intersection,
    median,
    median_height,
    median_of_sorted,
    round_half_up,
    safe_divide,
    union,
    union_all,
    vertical_overlap_ratio,
)
from ocrlayout.layout.model import Frame, TextFragment


def test_safe_divide_guards_zero_and_negative_denominators():
    assert safe_divide(1.0, 0.0) == 0.0
    assert safe_divide(1.0, -2.0) == 0.0
    assert safe_divide(1.0, 4.0) == 0.25


def test_median_odd_even_and_empty():
    assert median([]) == 0.0
    assert median([3.0, 1.0, 2.0]) == 2.0
    assert median([4.0, 1.0, 3.0, 2.0]) == 2.5
    assert median_of_sorted([1.0, 2.0, 3.0, 4.0]) == 2.5
    assert median_of_sorted([]) == 0.0


def test_median_height_resists_outlier():
    frags = [TextFragment.create(str(i), 0.0, 0.1 * i, 0.1, h) for i, h in enumerate([0.02, 0.02, 0.03, 0.5])]
    assert median_height(frags) == pytest.approx(0.025)


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(1.49) == 1


def test_union_and_union_all():
    a = Frame(0.1, 0.1, 0.2, 0.1)
    b = Frame(0.5, 0.15, 0.1, 0.1)
    u = union(a, b)
    assert u.x == pytest.approx(0.1)
    assert u.y == pytest.approx(0.1)
    assert u.width == pytest.approx(0.5)
    assert u.height == pytest.approx(0.15)
    assert union_all([a, b]) == u
    assert union_all([]) == Frame(0.0, 0.0, 0.0, 0.0)


def test_intersection_overlapping_and_disjoint():
    a = Frame(0.0, 0.0, 0.4, 0.2)
    b = Frame(0.2, 0.1, 0.4, 0.2)
    inter = intersection(a, b)
    assert inter is not None
    assert inter.width == pytest.approx(0.2)
    assert inter.height == pytest.approx(0.1)
    assert intersection(a, Frame(0.8, 0.8, 0.1, 0.1)) is None


def test_overlap_ratios():
    a = Frame(0.0, 0.0, 0.4, 0.1)
    b = Frame(0.2, 0.05, 0.4, 0.1)
    assert vertical_overlap_ratio(a, b) == pytest.approx(0.5)
    assert horizontal_overlap_ratio(a, b) == pytest.approx(1 / 3)


def test_overlap_ratio_with_zero_height_is_zero():
    flat = Frame(0.1, 0.5, 0.2, 0.0)
    assert vertical_overlap_ratio(flat, Frame(0.1, 0.4, 0.2, 0.2)) == 0.0
