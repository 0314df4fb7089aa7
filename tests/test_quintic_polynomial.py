import math

import pytest

from pathkit.quintic_polynomial import QuinticPolynomial, State, quintic_polynomial_planner


def test_boundary_conditions_hold():
    qp = QuinticPolynomial(1.0, 0.5, 0.2, 10.0, -0.3, 0.1, 4.0)
    assert qp.point(0.0) == pytest.approx(1.0)
    assert qp.first_derivative(0.0) == pytest.approx(0.5)
    assert qp.second_derivative(0.0) == pytest.approx(0.2)
    assert qp.point(4.0) == pytest.approx(10.0)
    assert qp.first_derivative(4.0) == pytest.approx(-0.3)
    assert qp.second_derivative(4.0) == pytest.approx(0.1)


def test_derivatives_are_consistent():
    qp = QuinticPolynomial(0.0, 1.0, 0.0, 5.0, 0.0, 0.0, 3.0)
    t, eps = 1.3, 1e-5
    assert qp.first_derivative(t) == pytest.approx((qp.point(t + eps) - qp.point(t - eps)) / (2 * eps), rel=1e-5)
    assert qp.second_derivative(t) == pytest.approx(
        (qp.first_derivative(t + eps) - qp.first_derivative(t - eps)) / (2 * eps), rel=1e-5
    )
    assert qp.third_derivative(t) == pytest.approx(
        (qp.second_derivative(t + eps) - qp.second_derivative(t - eps)) / (2 * eps), rel=1e-5
    )


def _example():
    start = State(10.0, 10.0, math.radians(10.0), 1.0, 0.1)
    goal = State(30.0, -10.0, math.radians(20.0), 1.0, 0.1)
    return quintic_polynomial_planner(start, goal, 5.0, 100.0, 5.0, 1.0, 0.5, 0.1), start


def test_planner_finds_trajectory_within_limits():
    traj, start = _example()
    n = len(traj.time)
    assert n > 1
    assert len(traj.x) == len(traj.y) == len(traj.yaw) == len(traj.v) == len(traj.a) == len(traj.j) == n
    assert traj.x[0] == pytest.approx(start.x)
    assert traj.y[0] == pytest.approx(start.y)
    assert traj.v[0] == pytest.approx(start.v)
    assert traj.yaw[0] == pytest.approx(start.yaw)
    assert all(abs(a) <= 1.0 for a in traj.a)
    assert all(abs(j) <= 0.5 for j in traj.j)


def test_planner_time_steps():
    traj, _ = _example()
    assert traj.time[0] == 0.0
    steps = [b - a for a, b in zip(traj.time, traj.time[1:])]
    assert all(s == pytest.approx(0.1) for s in steps)


def test_planner_returns_empty_when_impossible():
    start = State(0.0, 0.0, 0.0, 1.0, 0.0)
    goal = State(50.0, 50.0, 0.0, 1.0, 0.0)
    traj = quintic_polynomial_planner(start, goal, 1.0, 3.0, 1.0, 0.01, 0.01, 0.1)
    assert traj.time == []
    assert traj.x == []