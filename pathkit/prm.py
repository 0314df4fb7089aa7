"""Probabilistic roadmap planning among point obstacles."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


def _round(value: float) -> int:
    """Round half away from zero."""
    magnitude = int(math.floor(abs(value) + 0.5))
    return magnitude if value >= 0 else -magnitude


class KDTree:
    """Nearest-neighbour index over a fixed set of planar points."""

    def __init__(self, xs, ys):
        x_arr = np.asarray(xs, dtype=float)
        y_arr = np.asarray(ys, dtype=float)
        if x_arr.shape != y_arr.shape:
            raise ValueError("xs and ys must have the same length")
        if x_arr.size == 0:
            raise ValueError("at least one point is required")
        self._x = x_arr
        self._y = y_arr

    def __len__(self) -> int:
        return int(self._x.size)

    def query(self, x, y, k=1):
        """Indices and Euclidean distances of the k points closest to (x, y), nearest first."""
        if not 1 <= k <= len(self):
            raise ValueError(f"k must be between 1 and {len(self)}")
        dist = np.hypot(self._x - x, self._y - y)
        order = np.argsort(dist, kind="stable")[:k]
        return order.tolist(), dist[order].tolist()

    def _nearest_distances(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        dist = np.hypot(xs[:, None] - self._x[None, :], ys[:, None] - self._y[None, :])
        return dist.min(axis=1)


@dataclass
class _Node:
    x: float
    y: float
    cost: float
    parent: int


class ProbabilisticRoadmap:
    """Samples free space, links samples by collision-free edges and runs Dijkstra."""

    def __init__(self, ox, oy, robot_radius, sample_points=500, n_knn=10,
                 max_edge_len=30.0, rng=None):
        if robot_radius <= 0:
            raise ValueError("robot_radius must be positive")
        self._ox = [float(v) for v in ox]
        self._oy = [float(v) for v in oy]
        self._obstacles = KDTree(self._ox, self._oy)
        self.robot_radius = float(robot_radius)
        self.sample_points = int(sample_points)
        self.n_knn = int(n_knn)
        self.max_edge_len = float(max_edge_len)
        self._rng = np.random.default_rng(rng)

        self._plot_map: list[tuple[float, float, float, float]] = []
        self._expanded_x: list[float] = []
        self._expanded_y: list[float] = []

    def expanded_nodes(self):
        """Positions expanded by the last search, as (xs, ys)."""
        return list(self._expanded_x), list(self._expanded_y)

    def road_map(self):
        """Every roadmap edge built so far, as (x, y, dx, dy) tuples."""
        return list(self._plot_map)

    def plan(self, sx, sy, gx, gy):
        """Return the path from goal back to start as (xs, ys); empty lists if none exists."""
        sample_x, sample_y = self._sample_points(sx, sy, gx, gy)
        road_map = self._generate_road_map(sample_x, sample_y)

        for (x, y), edges in zip(zip(sample_x, sample_y), road_map):
            self._plot_map.extend((x, y, sample_x[j] - x, sample_y[j] - y) for j in edges)

        return self._dijkstra(sx, sy, gx, gy, road_map, sample_x, sample_y)

    def _sample_points(self, sx, sy, gx, gy):
        min_x, max_x = min(self._ox), max(self._ox)
        min_y, max_y = min(self._oy), max(self._oy)

        sample_x: list[float] = []
        sample_y: list[float] = []
        while len(sample_x) <= self.sample_points:
            tx = float(self._rng.random()) * (max_x - min_x) + min_x
            ty = float(self._rng.random()) * (max_y - min_y) + min_y
            _, dists = self._obstacles.query(tx, ty, 1)
            if dists[0] > self.robot_radius:
                sample_x.append(tx)
                sample_y.append(ty)

        sample_x.extend((float(sx), float(gx)))
        sample_y.extend((float(sy), float(gy)))
        return sample_x, sample_y

    def _generate_road_map(self, sample_x, sample_y):
        n_sample = len(sample_x)
        tree = KDTree(sample_x, sample_y)
        road_map: list[list[int]] = []
        for x, y in zip(sample_x, sample_y):
            indices, _ = tree.query(x, y, n_sample)
            edges: list[int] = []
            for j in indices:
                if self._valid_edge(x, y, sample_x[j], sample_y[j]):
                    edges.append(j)
                if len(edges) >= self.n_knn:
                    break
            road_map.append(edges)
        return road_map

    def _valid_edge(self, x1, y1, x2, y2) -> bool:
        dx, dy = x2 - x1, y2 - y1
        yaw = math.atan2(dy, dx)
        distance = math.hypot(dx, dy)
        if distance >= self.max_edge_len:
            return False

        step = self.robot_radius
        n_step = _round(distance / step)
        if n_step > 0:
            offsets = np.arange(n_step) * step
            xs = x1 + offsets * math.cos(yaw)
            ys = y1 + offsets * math.sin(yaw)
            if (self._obstacles._nearest_distances(xs, ys) < self.robot_radius).any():
                return False

        _, dists = self._obstacles.query(x2, y2, 1)
        return dists[0] > self.robot_radius

    def _dijkstra(self, sx, sy, gx, gy, road_map, sample_x, sample_y):
        start_id = len(road_map) - 2
        goal_id = len(road_map) - 1
        open_set = {start_id: _Node(float(sx), float(sy), 0.0, -1)}
        closed_set: dict[int, _Node] = {}

        self._expanded_x.clear()
        self._expanded_y.clear()

        goal: _Node | None = None
        while open_set:
            c_id, current = min(open_set.items(), key=lambda item: item[1].cost)
            self._expanded_x.append(current.x)
            self._expanded_y.append(current.y)

            if c_id == goal_id:
                goal = _Node(float(gx), float(gy), current.cost, current.parent)
                break

            del open_set[c_id]
            closed_set[c_id] = current

            for n_id in road_map[c_id]:
                if n_id in closed_set:
                    continue
                nx, ny = sample_x[n_id], sample_y[n_id]
                node = _Node(nx, ny, current.cost + math.hypot(nx - current.x, ny - current.y), c_id)
                existing = open_set.get(n_id)
                if existing is None or existing.cost > node.cost:
                    open_set[n_id] = node

        if goal is None:
            return [], []

        rx, ry = [goal.x], [goal.y]
        parent = goal.parent
        while parent != -1:
            node = closed_set[parent]
            rx.append(node.x)
            ry.append(node.y)
            parent = node.parent
        return rx, ry