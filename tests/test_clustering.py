import random

import pytest

from ocrlayout.layout.clustering import ClusteringPolicy, Row, cluster_rows
from ocrlayout.layout.model import MODE_CLUSTERED, MODE_PARAGRAPHS, ReconstructionOptions, TextFragment


def _at_mid(text, x, mid_y, height=0.02, width=0.1):
    return TextFragment.create(text, x, mid_y - height / 2, width, height)


def _texts(rows):
    return [[f.text for f in row.ordered()] for row in rows]


def _default_policies():
    opts = ReconstructionOptions()
    return [
        ClusteringPolicy.for_mode(opts, MODE_CLUSTERED),
        ClusteringPolicy.for_mode(opts, MODE_PARAGRAPHS),
    ]


def test_policy_for_mode_defaults():
    opts = ReconstructionOptions()
    clustered = ClusteringPolicy.for_mode(opts, MODE_CLUSTERED)
    paragraphs = ClusteringPolicy.for_mode(opts, MODE_PARAGRAPHS)
    assert clustered.strict is True
    assert clustered.grouping_factor == 0.5
    assert paragraphs.strict is False
    assert paragraphs.grouping_factor == 0.6
    forced = ClusteringPolicy.for_mode(ReconstructionOptions(row_grouping_factor=0.9, clustering="median"), MODE_CLUSTERED)
    assert forced.grouping_factor == 0.9
    assert forced.strict is False


def test_threshold_falls_back_when_heights_are_zero():
    policy = ClusteringPolicy(grouping_factor=0.5, min_reference_height=0.02)
    assert policy.threshold(0.0) == pytest.approx(0.01)
    assert policy.threshold(0.04) == pytest.approx(0.02)


def test_row_accumulator_tracks_median_not_mean():
    row = Row(_at_mid("a", 0.0, 0.10))
    row.add(_at_mid("b", 0.2, 0.11))
    row.add(_at_mid("c", 0.4, 0.30, height=0.06))
    assert len(row) == 3
    assert row.median_mid_y == pytest.approx(0.11)
    assert row.median_height == pytest.approx(0.02)
    assert row.bbox.y == pytest.approx(0.09)
    assert row.bbox.bottom == pytest.approx(0.33)


def test_row_ordered_left_to_right():
    row = Row(_at_mid("right", 0.7, 0.5))
    row.add(_at_mid("left", 0.1, 0.5))
    row.add(_at_mid("middle", 0.4, 0.5))
    assert [f.text for f in row.ordered()] == ["left", "middle", "right"]
    # insertion order is kept on the member list itself
    assert [f.text for f in row.fragments] == ["right", "left", "middle"]


def test_distant_lines_split_into_two_rows():
    frags = [_at_mid("top", 0.1, 0.10), _at_mid("bottom", 0.1, 0.50)]
    for policy in _default_policies():
        assert _texts(cluster_rows(frags, policy)) == [["top"], ["bottom"]]


def test_jittered_fragments_share_a_row():
    frags = [_at_mid("left", 0.1, 0.10), _at_mid("right", 0.6, 0.102)]
    for policy in _default_policies():
        assert _texts(cluster_rows(frags, policy)) == [["left", "right"]]


def test_empty_input_has_no_rows():
    assert cluster_rows([]) == []


def test_rows_sorted_top_to_bottom_regardless_of_input_order():
    frags = [
        _at_mid("c1", 0.1, 0.50), _at_mid("c2", 0.6, 0.505),
        _at_mid("a1", 0.1, 0.10), _at_mid("a2", 0.6, 0.098),
        _at_mid("b1", 0.1, 0.30), _at_mid("b2", 0.6, 0.301),
    ]
    expected = [["a1", "a2"], ["b1", "b2"], ["c1", "c2"]]
    rng = random.Random(7)
    for policy in _default_policies():
        for _ in range(10):
            shuffled = list(frags)
            rng.shuffle(shuffled)
            assert _texts(cluster_rows(shuffled, policy)) == expected


def test_equidistant_rows_first_row_wins():
    # Heights are chosen so that the geometric gate keeps "small" and "big"
    # apart while "mid" is compatible with both; all share mid-Y 0.5.
    small = TextFragment.create("small", 0.1, 0.46875, 0.1, 0.0625)
    big = TextFragment.create("big", 0.4, 0.40625, 0.1, 0.1875)
    mid = TextFragment.create("mid", 0.7, 0.4375, 0.1, 0.125)
    policy = ClusteringPolicy(grouping_factor=0.5, strict=True)
    for order in ([small, big, mid], [mid, big, small], [big, mid, small]):
        assert _texts(cluster_rows(order, policy)) == [["small", "mid"], ["big"]]


def test_geometric_gate_rejects_incompatible_heights():
    frags = [_at_mid("caption", 0.1, 0.5, height=0.02), _at_mid("HEADLINE", 0.5, 0.5, height=0.06)]
    plain = ClusteringPolicy(grouping_factor=0.5, strict=False)
    strict = ClusteringPolicy(grouping_factor=0.5, strict=True)
    assert len(cluster_rows(frags, plain)) == 1
    assert len(cluster_rows(frags, strict)) == 2


def test_geometric_growth_limit_depends_on_horizontal_overlap():
    upper = TextFragment.create("upper", 0.1, 0.400, 0.2, 0.04)
    stacked_lower = TextFragment.create("lower", 0.1, 0.415, 0.2, 0.04)
    skewed_lower = TextFragment.create("lower", 0.5, 0.415, 0.2, 0.04)
    strict = ClusteringPolicy(grouping_factor=0.5, strict=True)
    plain = ClusteringPolicy(grouping_factor=0.5, strict=False)

    assert len(cluster_rows([upper, stacked_lower], plain)) == 1
    assert len(cluster_rows([upper, stacked_lower], strict)) == 2
    assert len(cluster_rows([upper, skewed_lower], strict)) == 1


def test_gradually_descending_row_stays_together():
    # each word sits a little lower than the previous one
    frags = [_at_mid(f"w{i}", 0.05 * i, 0.200 + 0.001 * i) for i in range(9)]
    frags.append(_at_mid("next", 0.1, 0.230))
    rows = cluster_rows(frags, ClusteringPolicy(grouping_factor=0.5))
    assert len(rows) == 2
    assert [f.text for f in rows[1].ordered()] == ["next"]


def test_zero_height_fragments_do_not_crash():
    frags = [
        TextFragment.create("a", 0.1, 0.5, 0.0, 0.0),
        TextFragment.create("b", 0.3, 0.5, 0.0, 0.0),
        TextFragment.create("c", 0.1, 0.9, 0.0, 0.0),
    ]
    for policy in _default_policies():
        assert _texts(cluster_rows(frags, policy)) == [["a", "b"], ["c"]]
