"""Quintic polynomial trajectories and a planner built on them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np


@dataclass
class State:
    """Planar state: position, heading, speed and acceleration."""

    x: float
    y: float
    yaw: float
    v: float
    a: float


@dataclass
class QuinticTrajectory:
    """Sampled trajectory; all lists have the same length."""

    time: list[float] = field(default_factory=list)
    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)
    yaw: list[float] = field(default_factory=list)
    v: list[float] = field(default_factory=list)
    a: list[float] = field(default_factory=list)
    j: list[float] = field(default_factory=list)


class QuinticPolynomial:
    """Fifth-order polynomial meeting position, velocity and acceleration at both ends."""

    def __init__(self, xs, vs, accel_start, xe, ve, accel_end, duration):
        t = float(duration)
        self._a0 = float(xs)
        self._a1 = float(vs)
        self._a2 = accel_start / 2.0
        mat = np.array(
            [
                [t**3, t**4, t**5],
                [3 * t**2, 4 * t**3, 5 * t**4],
                [6 * t, 12 * t**2, 20 * t**3],
            ]
        )
        rhs = np.array(
            [
                xe - self._a0 - self._a1 * t - self._a2 * t**2,
                ve - self._a1 - 2 * self._a2 * t,
                accel_end - 2 * self._a2,
            ]
        )
        self._a3, self._a4, self._a5 = (float(v) for v in np.linalg.solve(mat, rhs))

    def point(self, t):
        """Position at time t."""
        return (
            self._a0
            + self._a1 * t
            + self._a2 * t**2
            + self._a3 * t**3
            + self._a4 * t**4
            + self._a5 * t**5
        )

    def first_derivative(self, t):
        """Velocity at time t."""
        return (
            self._a1
            + 2 * self._a2 * t
            + 3 * self._a3 * t**2
            + 4 * self._a4 * t**3
            + 5 * self._a5 * t**4
        )

    def second_derivative(self, t):
        """Acceleration at time t."""
        return 2 * self._a2 + 6 * self._a3 * t + 12 * self._a4 * t**2 + 20 * self._a5 * t**3

    def third_derivative(self, t):
        """Jerk at time t."""
        return 6 * self._a3 + 24 * self._a4 * t + 60 * self._a5 * t**2


def _sample(xqp: QuinticPolynomial, yqp: QuinticPolynomial, duration: float, dt: float,
            max_accel: float, max_jerk: float) -> QuinticTrajectory | None:
    traj = QuinticTrajectory()
    t = 0.0
    while t < duration + dt:
        traj.time.append(t)
        traj.x.append(xqp.point(t))
        traj.y.append(yqp.point(t))

        vx, vy = xqp.first_derivative(t), yqp.first_derivative(t)
        traj.yaw.append(math.atan2(vy, vx))
        traj.v.append(math.hypot(vx, vy))

        a = math.hypot(xqp.second_derivative(t), yqp.second_derivative(t))
        if len(traj.v) >= 2 and traj.v[-1] - traj.v[-2] < 0.0:
            a = -a
        traj.a.append(a)

        j = math.hypot(xqp.third_derivative(t), yqp.third_derivative(t))
        if len(traj.j) >= 2 and traj.a[-1] - traj.a[-2] < 0.0:
            j = -j
        traj.j.append(j)

        if abs(a) > max_accel or abs(j) > max_jerk:
            return None
        t += dt
    return traj


def quintic_polynomial_planner(start, goal, min_t, max_t, t_res, max_accel, max_jerk, dt):
    """Return the first trajectory, trying durations from min_t upward, within the limits.

    An empty trajectory is returned when no duration satisfies the limits.
    """
    vxs, vys = start.v * math.cos(start.yaw), start.v * math.sin(start.yaw)
    vxg, vyg = goal.v * math.cos(goal.yaw), goal.v * math.sin(goal.yaw)
    axs, ays = start.a * math.cos(start.yaw), start.a * math.sin(start.yaw)
    axg, ayg = goal.a * math.cos(goal.yaw), goal.a * math.sin(goal.yaw)

    duration = min_t
    while duration < max_t:
        xqp = QuinticPolynomial(start.x, vxs, axs, goal.x, vxg, axg, duration)
        yqp = QuinticPolynomial(start.y, vys, ays, goal.y, vyg, ayg, duration)
        traj = _sample(xqp, yqp, duration, dt, max_accel, max_jerk)
        if traj is not None:
            return traj
        duration += t_res
    return QuinticTrajectory()