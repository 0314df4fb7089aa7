"""Natural cubic splines in one and two dimensions."""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from itertools import accumulate, pairwise

import numpy as np


@dataclass
class SplineCourse:
    """Points sampled along a 2D spline, with heading and curvature."""

    rx: list[float] = field(default_factory=list)
    ry: list[float] = field(default_factory=list)
    ryaw: list[float] = field(default_factory=list)
    rk: list[float] = field(default_factory=list)
    s: list[float] = field(default_factory=list)


class CubicSpline:
    """Natural cubic spline through the points (x[i], y[i])."""

    def __init__(self, x, y):
        self._x = [float(v) for v in x]
        self._y = [float(v) for v in y]
        if len(self._x) != len(self._y):
            raise ValueError("x and y must have the same length")
        if len(self._x) < 2:
            raise ValueError("a spline needs at least two points")

        self._h = np.array([b - a for a, b in pairwise(self._x)])
        self._a = np.array(self._y)
        self._c = np.linalg.solve(self._matrix_a(), self._vector_b())

        n = len(self._x)
        self._b = np.zeros(n)
        self._d = np.zeros(n)
        a, c, h = self._a, self._c, self._h
        self._d[:-1] = (c[1:] - c[:-1]) / (3.0 * h)
        self._b[:-1] = (a[1:] - a[:-1]) / h - (c[1:] + 2.0 * c[:-1]) * h / 3.0

    def _matrix_a(self) -> np.ndarray:
        n = len(self._x)
        h = self._h
        mat = np.zeros((n, n))
        mat[0, 0] = 1.0
        for i, hi in enumerate(h):
            if i != n - 2:
                mat[i + 1, i + 1] = 2.0 * (hi + h[i + 1])
            mat[i + 1, i] = hi
            mat[i, i + 1] = hi
        mat[0, 1] = 0.0
        mat[n - 1, n - 2] = 0.0
        mat[n - 1, n - 1] = 1.0
        return mat

    def _vector_b(self) -> np.ndarray:
        a, h = self._a, self._h
        vec = np.zeros(len(self._x))
        vec[1:-1] = 3.0 * (a[2:] - a[1:-1]) / h[1:] - 3.0 * (a[1:-1] - a[:-2]) / h[:-1]
        return vec

    def _locate(self, t: float) -> tuple[int, float]:
        if t < self._x[0] or t > self._x[-1]:
            raise ValueError("outside the defined domain of the spline")
        i = bisect_right(self._x, t) - 1
        return i, t - self._x[i]

    def position(self, t):
        """Value of the spline at t."""
        i, dx = self._locate(t)
        return float(self._a[i] + self._b[i] * dx + self._c[i] * dx**2 + self._d[i] * dx**3)

    def first_derivative(self, t):
        """First derivative of the spline at t."""
        i, dx = self._locate(t)
        return float(self._b[i] + 2.0 * self._c[i] * dx + 3.0 * self._d[i] * dx**2)

    def second_derivative(self, t):
        """Second derivative of the spline at t."""
        i, dx = self._locate(t)
        return float(2.0 * self._c[i] + 6.0 * self._d[i] * dx)


class CubicSpline2D:
    """Planar curve parameterised by cumulative chord length."""

    def __init__(self, x, y):
        xs = [float(v) for v in x]
        ys = [float(v) for v in y]
        steps = (math.hypot(x1 - x0, y1 - y0) for (x0, x1), (y0, y1) in zip(pairwise(xs), pairwise(ys)))
        self.s: list[float] = list(accumulate(steps, initial=0.0))
        self._sx = CubicSpline(self.s, xs)
        self._sy = CubicSpline(self.s, ys)

    def position(self, s):
        """(x, y) at arc parameter s."""
        return self._sx.position(s), self._sy.position(s)

    def curvature(self, s):
        """Signed curvature at arc parameter s."""
        dx = self._sx.first_derivative(s)
        ddx = self._sx.second_derivative(s)
        dy = self._sy.first_derivative(s)
        ddy = self._sy.second_derivative(s)
        return (ddy * dx - ddx * dy) / (dx**2 + dy**2) ** 1.5

    def yaw(self, s):
        """Heading angle at arc parameter s."""
        return math.atan2(self._sy.first_derivative(s), self._sx.first_derivative(s))


def calculate_spline_course(x, y, ds=0.1):
    """Sample a 2D spline through the given points every ds along its length."""
    spline = CubicSpline2D(x, y)
    course = SplineCourse()
    end = spline.s[-1]
    s = 0.0
    while s < end:
        px, py = spline.position(s)
        course.s.append(s)
        course.rx.append(px)
        course.ry.append(py)
        course.ryaw.append(spline.yaw(s))
        course.rk.append(spline.curvature(s))
        s += ds
    return course