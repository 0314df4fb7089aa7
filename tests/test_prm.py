import math

import pytest

from pathkit.prm import KDTree, ProbabilisticRoadmap


def _box(size=20):
    ox, oy = [], []
    for i in range(size + 1):
        ox += [i, i, 0, size]
        oy += [0, size, i, i]
    return ox, oy


def _clearance(ox, oy, x, y):
    return min(math.hypot(x - a, y - b) for a, b in zip(ox, oy))


def test_kdtree_nearest_first():
    tree = KDTree([0.0, 5.0, 10.0], [0.0, 0.0, 0.0])
    indices, dists = tree.query(4.0, 0.0, 3)
    assert indices == [1, 0, 2]
    assert dists == pytest.approx([1.0, 4.0, 6.0])


def test_kdtree_single_neighbour():
    tree = KDTree([1.0, 3.0], [1.0, 4.0])
    indices, dists = tree.query(3.0, 4.0, 1)
    assert indices == [1]
    assert dists == pytest.approx([0.0])


def test_kdtree_rejects_bad_k():
    tree = KDTree([1.0, 2.0], [1.0, 2.0])
    with pytest.raises(ValueError):
        tree.query(0.0, 0.0, 0)
    with pytest.raises(ValueError):
        tree.query(0.0, 0.0, 3)


def test_kdtree_rejects_mismatched_input():
    with pytest.raises(ValueError):
        KDTree([1.0, 2.0], [1.0])
    with pytest.raises(ValueError):
        KDTree([], [])


def test_roadmap_rejects_empty_obstacles():
    with pytest.raises(ValueError):
        ProbabilisticRoadmap([], [], 1.0)


def test_roadmap_rejects_non_positive_radius():
    ox, oy = _box()
    with pytest.raises(ValueError):
        ProbabilisticRoadmap(ox, oy, 0.0)


def test_plan_finds_path_from_goal_to_start():
    ox, oy = _box()
    prm = ProbabilisticRoadmap(ox, oy, 1.0, sample_points=60, n_knn=10, max_edge_len=30.0, rng=1)
    rx, ry = prm.plan(5.0, 5.0, 15.0, 15.0)
    assert len(rx) == len(ry) >= 2
    assert (rx[0], ry[0]) == (15.0, 15.0)
    assert (rx[-1], ry[-1]) == (5.0, 5.0)


def test_path_respects_edge_length_and_clearance():
    ox, oy = _box()
    prm = ProbabilisticRoadmap(ox, oy, 1.0, sample_points=60, n_knn=10, max_edge_len=30.0, rng=2)
    rx, ry = prm.plan(5.0, 5.0, 15.0, 15.0)
    assert rx
    points = list(zip(rx, ry))
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        assert math.hypot(x1 - x0, y1 - y0) < 30.0
    for x, y in points:
        assert _clearance(ox, oy, x, y) > 1.0


def test_expanded_nodes_contain_path():
    ox, oy = _box()
    prm = ProbabilisticRoadmap(ox, oy, 1.0, sample_points=60, rng=3)
    rx, ry = prm.plan(5.0, 5.0, 15.0, 15.0)
    ex, ey = prm.expanded_nodes()
    expanded = set(zip(ex, ey))
    assert set(zip(rx, ry)) <= expanded
    assert (ex[0], ey[0]) == (5.0, 5.0)


def test_no_path_when_edges_too_short():
    ox, oy = _box()
    prm = ProbabilisticRoadmap(ox, oy, 1.0, sample_points=20, max_edge_len=0.001, rng=4)
    assert prm.plan(5.0, 5.0, 15.0, 15.0) == ([], [])
    ex, ey = prm.expanded_nodes()
    assert list(zip(ex, ey)) == [(5.0, 5.0)]


def test_road_map_edges_stay_inside_box_and_accumulate():
    ox, oy = _box()
    prm = ProbabilisticRoadmap(ox, oy, 1.0, sample_points=30, n_knn=5, rng=5)
    prm.plan(5.0, 5.0, 15.0, 15.0)
    first = prm.road_map()
    assert first
    for x, y, dx, dy in first:
        assert 0.0 < x < 20.0 and 0.0 < y < 20.0
        assert 0.0 < x + dx < 20.0 and 0.0 < y + dy < 20.0
        assert math.hypot(dx, dy) < 30.0
    prm.plan(5.0, 5.0, 15.0, 15.0)
    assert len(prm.road_map()) > len(first)
    assert prm.road_map()[: len(first)] == first


def test_seeded_planners_agree():
    ox, oy = _box()
    a = ProbabilisticRoadmap(ox, oy, 1.0, sample_points=40, rng=7)
    b = ProbabilisticRoadmap(ox, oy, 1.0, sample_points=40, rng=7)
    assert a.plan(5.0, 5.0, 15.0, 15.0) == b.plan(5.0, 5.0, 15.0, 15.0)