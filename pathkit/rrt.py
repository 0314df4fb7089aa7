"""Rapidly-exploring random trees among circular obstacles."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np


@dataclass
class Node:
    """A tree vertex with the path that led to it from its parent."""

    x: float = 0.0
    y: float = 0.0
    path_x: list[float] = field(default_factory=list)
    path_y: list[float] = field(default_factory=list)
    parent: int = -1
    idx: int = -1
    cost: float = 0.0


class CircleObstacle(NamedTuple):
    """A disc to be avoided: centre and radius."""

    x: float
    y: float
    radius: float


class _RRTBase:
    """Sampling, steering and collision checks shared by the tree planners."""

    def __init__(self, min_rand, max_rand, obstacles, expand_dis, path_res,
                 goal_sample_rate, max_iter, rng):
        if path_res <= 0:
            raise ValueError("path_res must be positive")
        if max_rand < min_rand:
            raise ValueError("max_rand must not be smaller than min_rand")
        if max_iter < 0:
            raise ValueError("max_iter must not be negative")
        self.min_rand = float(min_rand)
        self.max_rand = float(max_rand)
        self.obstacles = [CircleObstacle(*obs) for obs in obstacles]
        self.expand_dis = float(expand_dis)
        self.path_res = float(path_res)
        self.goal_sample_rate = float(goal_sample_rate)
        self.max_iter = int(max_iter)
        self._rng = np.random.default_rng(rng)
        self._start = Node()
        self._goal = Node()

    def _random_node(self) -> Node:
        if int(self._rng.integers(0, 101)) > self.goal_sample_rate:
            return Node(
                float(self._rng.uniform(self.min_rand, self.max_rand)),
                float(self._rng.uniform(self.min_rand, self.max_rand)),
            )
        return Node(self._goal.x, self._goal.y)

    @staticmethod
    def _nearest_index(nodes: list[Node], query: Node) -> int:
        return min(
            range(len(nodes)),
            key=lambda i: math.hypot(nodes[i].x - query.x, nodes[i].y - query.y),
        )

    @staticmethod
    def _distance_and_angle(s: Node, g: Node) -> tuple[float, float]:
        dx, dy = g.x - s.x, g.y - s.y
        return math.hypot(dx, dy), math.atan2(dy, dx)

    def _distance_to_goal(self, node: Node) -> float:
        return math.hypot(node.x - self._goal.x, node.y - self._goal.y)

    def _steer(self, from_node: Node, to_node: Node, extend_length: float = math.inf) -> Node:
        """New node moved from from_node towards to_node in path_res steps; parent is from_node."""
        new = Node(from_node.x, from_node.y, [from_node.x], [from_node.y])
        d, theta = self._distance_and_angle(new, to_node)
        extend_length = min(extend_length, d)

        step_x = self.path_res * math.cos(theta)
        step_y = self.path_res * math.sin(theta)
        for _ in range(math.floor(extend_length / self.path_res)):
            new.x += step_x
            new.y += step_y
            new.path_x.append(new.x)
            new.path_y.append(new.y)

        final_d, _ = self._distance_and_angle(new, to_node)
        if final_d <= self.path_res:
            new.path_x.append(to_node.x)
            new.path_y.append(to_node.y)

        new.parent = from_node.idx
        return new

    def _no_collision(self, node: Node) -> bool:
        return not any(
            math.hypot(obs.x - px, obs.y - py) <= obs.radius
            for obs in self.obstacles
            for px, py in zip(node.path_x, node.path_y)
        )

    @staticmethod
    def _course(nodes: list[Node], index: int) -> tuple[list[float], list[float]]:
        """Positions from nodes[index] up to, but not including, the root."""
        rx: list[float] = []
        ry: list[float] = []
        node = nodes[index]
        for _ in range(len(nodes) + 1):
            if node.parent == -1:
                return rx, ry
            rx.append(node.x)
            ry.append(node.y)
            node = nodes[node.parent]
        raise RuntimeError("the tree contains a cycle")


class RRT(_RRTBase):
    """Basic RRT: grows a tree until a node can reach the goal."""

    def __init__(self, min_rand, max_rand, obstacles, expand_dis=3.0, path_res=0.25,
                 goal_sample_rate=5, max_iter=500, rng=None):
        super().__init__(min_rand, max_rand, obstacles, expand_dis, path_res,
                         goal_sample_rate, max_iter, rng)

    def plan(self, sx, sy, gx, gy):
        """Return the path from the last tree node back towards the start as (xs, ys).

        The root is not included. Empty lists are returned when no path is found.
        """
        self._start = Node(float(sx), float(sy))
        self._goal = Node(float(gx), float(gy))
        nodes = [Node(float(sx), float(sy))]

        for _ in range(self.max_iter):
            random_node = self._random_node()
            nearest = self._nearest_index(nodes, random_node)
            new_node = self._steer(nodes[nearest], random_node, self.expand_dis)
            new_node.parent = nearest

            if self._no_collision(new_node):
                nodes.append(new_node)

            if self._distance_to_goal(new_node) <= self.expand_dis:
                final_node = self._steer(new_node, self._goal, self.expand_dis)
                if self._no_collision(final_node):
                    return self._course(nodes, len(nodes) - 1)

        return [], []