"""Dijkstra and A* search on an inflated occupancy grid."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

_SQRT2 = math.sqrt(2.0)
_MOTIONS = (
    (1, 0, 1.0),
    (0, 1, 1.0),
    (-1, 0, 1.0),
    (0, -1, 1.0),
    (-1, -1, _SQRT2),
    (-1, 1, _SQRT2),
    (1, -1, _SQRT2),
    (1, 1, _SQRT2),
)


def _round(value: float) -> int:
    """Round half away from zero."""
    magnitude = int(math.floor(abs(value) + 0.5))
    return magnitude if value >= 0 else -magnitude


@dataclass
class _Node:
    x: int
    y: int
    cost: float
    parent: tuple[int, int] | None


class GridSearchBase(ABC):
    """Shared grid construction and path extraction for grid planners."""

    def __init__(self, ox, oy, grid_res, robot_radius):
        xs = [int(v) for v in ox]
        ys = [int(v) for v in oy]
        if len(xs) != len(ys):
            raise ValueError("ox and oy must have the same length")
        if not xs:
            raise ValueError("at least one obstacle is required")

        self.grid_res = float(grid_res)
        self.robot_radius = float(robot_radius)

        self._min_x, self._max_x = float(min(xs)), float(max(xs))
        self._min_y, self._max_y = float(min(ys)), float(max(ys))
        self._x_width = _round((self._max_x - self._min_x) / self.grid_res)
        self._y_width = _round((self._max_y - self._min_y) / self.grid_res)
        self._obstacle_map = self._build_obstacle_map(xs, ys)

        self._expanded_x: list[int] = []
        self._expanded_y: list[int] = []

    def _build_obstacle_map(self, ox: list[int], oy: list[int]) -> np.ndarray:
        cell_x = np.trunc(np.arange(max(self._x_width, 0)) * self.grid_res + self._min_x)
        cell_y = np.trunc(np.arange(max(self._y_width, 0)) * self.grid_res + self._min_y)
        dist = np.hypot(
            np.asarray(ox, dtype=float)[None, None, :] - cell_x[:, None, None],
            np.asarray(oy, dtype=float)[None, None, :] - cell_y[None, :, None],
        )
        return (dist <= self.robot_radius).any(axis=2)

    def _position(self, index: int, min_pos: float) -> float:
        return index * self.grid_res + min_pos

    def _xy_index(self, pos: float, min_pos: float) -> int:
        return _round((int(pos) - int(min_pos)) / self.grid_res)

    def _verify(self, node: _Node) -> bool:
        px = self._position(node.x, self._min_x)
        py = self._position(node.y, self._min_y)
        if px < self._min_x or py < self._min_y:
            return False
        if px >= self._max_x or py >= self._max_y:
            return False
        if not (0 <= node.x < self._x_width and 0 <= node.y < self._y_width):
            return False
        return not self._obstacle_map[node.x, node.y]

    def _final_path(self, goal: _Node, closed: dict[tuple[int, int], _Node]):
        rx = [int(self._position(goal.x, self._min_x))]
        ry = [int(self._position(goal.y, self._min_y))]
        parent = goal.parent
        while parent is not None:
            node = closed[parent]
            rx.append(int(self._position(node.x, self._min_x)))
            ry.append(int(self._position(node.y, self._min_y)))
            parent = node.parent
        return rx, ry

    def _search(self, sx, sy, gx, gy, heuristic: Callable[[_Node, int, int], float]):
        start = _Node(self._xy_index(sx, self._min_x), self._xy_index(sy, self._min_y), 0.0, None)
        goal_x = self._xy_index(gx, self._min_x)
        goal_y = self._xy_index(gy, self._min_y)

        open_set = {(start.x, start.y): start}
        closed_set: dict[tuple[int, int], _Node] = {}

        while open_set:
            key, current = min(
                open_set.items(),
                key=lambda item: item[1].cost + heuristic(item[1], goal_x, goal_y),
            )
            self._expanded_x.append(int(self._position(current.x, self._min_x)))
            self._expanded_y.append(int(self._position(current.y, self._min_y)))

            if current.x == goal_x and current.y == goal_y:
                return self._final_path(current, closed_set)

            del open_set[key]
            closed_set[key] = current

            for dx, dy, step in _MOTIONS:
                node = _Node(current.x + dx, current.y + dy, current.cost + step, key)
                node_key = (node.x, node.y)
                if node_key in closed_set or not self._verify(node):
                    continue
                existing = open_set.get(node_key)
                if existing is None or existing.cost >= node.cost:
                    open_set[node_key] = node

        raise ValueError("no path between start and goal")

    def expanded_nodes(self):
        """Positions of every node expanded so far, as (xs, ys)."""
        return list(self._expanded_x), list(self._expanded_y)

    @abstractmethod
    def plan(self, sx, sy, gx, gy):
        """Return the path from goal back to start as (xs, ys)."""


class Dijkstra(GridSearchBase):
    """Uniform-cost search on the grid."""

    def plan(self, sx, sy, gx, gy):
        return self._search(sx, sy, gx, gy, lambda node, goal_x, goal_y: 0.0)


class AStar(GridSearchBase):
    """A* search with a Euclidean heuristic in grid units."""

    def plan(self, sx, sy, gx, gy):
        return self._search(
            sx, sy, gx, gy,
            lambda node, goal_x, goal_y: math.hypot(node.x - goal_x, node.y - goal_y),
        )