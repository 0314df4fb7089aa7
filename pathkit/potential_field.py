"""Grid-based potential field path planning."""

from __future__ import annotations

import math

import numpy as np

_MOTIONS = ((1, 0), (0, 1), (-1, 0), (0, -1), (-1, -1), (-1, 1), (1, -1), (1, 1))
_MIN_OBSTACLE_DISTANCE = 0.1


def _round(value: float) -> int:
    """Round half away from zero."""
    magnitude = int(math.floor(abs(value) + 0.5))
    return magnitude if value >= 0 else -magnitude


class PotentialField:
    """Descends a sum of attractive and repulsive potentials over a grid."""

    def __init__(self, ox, oy, reso, robot_radius, kp=5.0, eta=100.0, area_width=30.0):
        self._ox = np.asarray(ox, dtype=float)
        self._oy = np.asarray(oy, dtype=float)
        if self._ox.shape != self._oy.shape:
            raise ValueError("ox and oy must have the same length")
        if self._ox.size == 0:
            raise ValueError("at least one obstacle is required")

        self.reso = float(reso)
        self.robot_radius = float(robot_radius)
        self.kp = float(kp)
        self.eta = float(eta)
        self.area_width = float(area_width)

        half = self.area_width / 2.0
        self._min_x = float(self._ox.min()) - half
        self._min_y = float(self._oy.min()) - half
        self._max_x = float(self._ox.max()) + half
        self._max_y = float(self._oy.max()) + half

    def _potential_map(self, gx: float, gy: float) -> np.ndarray:
        xw = max(_round((self._max_x - self._min_x) / self.reso), 0)
        yw = max(_round((self._max_y - self._min_y) / self.reso), 0)
        xs = np.arange(xw) * self.reso + self._min_x
        ys = np.arange(yw) * self.reso + self._min_y
        grid_x, grid_y = np.meshgrid(xs, ys, indexing="ij")

        attractive = 0.5 * self.kp * np.hypot(grid_x - gx, grid_y - gy)

        nearest = np.hypot(
            grid_x[..., None] - self._ox, grid_y[..., None] - self._oy
        ).min(axis=2, initial=np.inf)
        clipped = np.maximum(nearest, _MIN_OBSTACLE_DISTANCE)
        repulsive = np.where(
            nearest <= self.robot_radius,
            0.5 * self.eta * (1.0 / clipped - 1.0 / self.robot_radius) ** 2,
            0.0,
        )
        return attractive + repulsive

    def plan(self, sx, sy, gx, gy):
        """Return the visited (x, y) points from start towards goal, start excluded.

        Raises RuntimeError when the descent is trapped and would cycle forever.
        """
        pmap = self._potential_map(gx, gy)
        xw, yw = pmap.shape

        ix = _round((sx - self._min_x) / self.reso)
        iy = _round((sy - self._min_y) / self.reso)
        d = math.hypot(sx - gx, sy - gy)

        path: list[tuple[float, float]] = []
        visited = {(ix, iy)}
        while d >= self.reso:
            best: tuple[int, int] | None = None
            best_p = math.inf
            for dx, dy in _MOTIONS:
                nx, ny = ix + dx, iy + dy
                if not (0 <= nx < xw and 0 <= ny < yw):
                    continue
                p = pmap[nx, ny]
                if p < best_p:
                    best_p = p
                    best = (nx, ny)

            if best is None:
                raise RuntimeError("no cell of the potential map is reachable")
            if best in visited:
                raise RuntimeError("planner is trapped in a local minimum")
            visited.add(best)

            ix, iy = best
            xp = ix * self.reso + self._min_x
            yp = iy * self.reso + self._min_y
            d = math.hypot(gx - xp, gy - yp)
            path.append((xp, yp))

        return path