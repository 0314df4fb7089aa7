"""RRT* planner that rewires its tree towards lower path cost."""

from __future__ import annotations

import math
import sys

from pathkit.rrt import Node, _RRTBase


class RRTStar(_RRTBase):
    """Asymptotically optimal RRT with parent choice and rewiring."""

    def __init__(self, min_rand, max_rand, obstacles, expand_dis=3.0, path_res=0.1,
                 goal_sample_rate=5, max_iter=500, connect_circle_dist=50.0, rng=None):
        super().__init__(min_rand, max_rand, obstacles, expand_dis, path_res,
                         goal_sample_rate, max_iter, rng)
        self.connect_circle_dist = float(connect_circle_dist)
        self._nodes: list[Node] = []

    def plan(self, sx, sy, gx, gy):
        """Grow the tree for max_iter iterations, then return the path as (xs, ys).

        The path runs from the chosen node near the goal back towards the start,
        without the root. Empty lists are returned when no node reaches the goal.
        """
        self._start = Node(float(sx), float(sy), idx=0)
        self._goal = Node(float(gx), float(gy))
        self._nodes = [Node(float(sx), float(sy), idx=0)]

        for _ in range(self.max_iter):
            random_node = self._random_node()
            nearest = self._nearest_index(self._nodes, random_node)
            new_node = self._steer(self._nodes[nearest], random_node, self.expand_dis)
            new_node.idx = len(self._nodes)

            if not self._no_collision(new_node):
                continue
            near = self._near_nodes(new_node)
            chosen = self._choose_parent(new_node, near)
            if chosen is not None:
                self._nodes.append(chosen)
                self._rewire(chosen, near)

        last = self._best_goal_node()
        if last == -1:
            return [], []
        return self._course(self._nodes, last)

    def _best_goal_node(self) -> int:
        for i, node in enumerate(self._nodes):
            if self._distance_to_goal(node) < self.expand_dis and \
                    self._no_collision(self._steer(node, self._goal)):
                return i
        return -1

    def _near_nodes(self, node: Node) -> list[int]:
        nnodes = len(self._nodes) + 1
        radius = self.connect_circle_dist * math.sqrt(math.log(nnodes) / nnodes)
        radius = min(radius, self.expand_dis)
        return [
            i for i, other in enumerate(self._nodes)
            if math.hypot(other.x - node.x, other.y - node.y) <= radius
        ]

    def _new_cost(self, from_node: Node, to_node: Node) -> float:
        d, _ = self._distance_and_angle(from_node, to_node)
        return from_node.cost + d

    def _choose_parent(self, node: Node, near: list[int]) -> Node | None:
        """A replacement for node hung from its cheapest reachable neighbour, if any."""
        best: Node | None = None
        min_cost = sys.float_info.max
        for i in near:
            candidate = self._nodes[i]
            cost = self._new_cost(candidate, node)
            if self._no_collision(self._steer(candidate, node)) and cost < min_cost:
                best = candidate
                min_cost = cost

        if best is None:
            return None

        replacement = self._steer(best, node)
        replacement.idx = node.idx
        replacement.parent = best.idx
        replacement.cost = self._new_cost(best, node)
        return replacement

    def _rewire(self, node: Node, near: list[int]) -> None:
        for i in near:
            near_node = self._nodes[i]
            edge_node = self._steer(node, near_node)
            edge_node.cost = self._new_cost(node, near_node)
            edge_node.idx = near_node.idx
            if self._no_collision(edge_node) and edge_node.cost < near_node.cost:
                self._nodes[i] = edge_node
                self._propagate_cost_to_leaves(node)

    def _propagate_cost_to_leaves(self, parent: Node) -> None:
        stack = [parent]
        seen = {parent.idx}
        while stack:
            current = stack.pop()
            for child in self._nodes:
                if child.parent == current.idx and child.idx not in seen:
                    child.cost = self._new_cost(current, child)
                    seen.add(child.idx)
                    stack.append(child)