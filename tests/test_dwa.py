import dataclasses
import math

import pytest

from pathkit.dwa import (
    Config,
    Control,
    DynamicWindow,
    RobotState,
    RobotType,
    calculate_control_and_trajectory,
    calculate_dynamic_window,
    calculate_obstacle_cost,
    calculate_to_goal_cost,
    dwa_control,
    motion,
    predict_trajectory,
    trajectory_to_points,
)


def _fast_config():
    return dataclasses.replace(Config(), yawrate_reso=math.radians(2.0), predict_time=1.0)


def test_motion_straight():
    s = motion(RobotState(1.0, 2.0, 0.0, 0.0, 0.0), Control(2.0, 0.0), 0.5)
    assert s.x == pytest.approx(2.0)
    assert s.y == pytest.approx(2.0)
    assert s.v == 2.0
    assert s.w == 0.0


def test_motion_updates_heading_first():
    s = motion(RobotState(), Control(1.0, math.pi / 2), 1.0)
    assert s.theta == pytest.approx(math.pi / 2)
    assert s.x == pytest.approx(0.0, abs=1e-12)
    assert s.y == pytest.approx(1.0)


def test_dynamic_window_is_clipped():
    cfg = Config()
    dw = calculate_dynamic_window(RobotState(v=cfg.max_speed, w=-cfg.max_yawrate), cfg)
    assert dw.vmax == cfg.max_speed
    assert dw.yaw_rate_min == -cfg.max_yawrate
    assert dw.vmin == pytest.approx(cfg.max_speed - cfg.max_accel * cfg.dt)
    assert dw.yaw_rate_max == pytest.approx(-cfg.max_yawrate + cfg.max_dyawrate * cfg.dt)


def test_predict_trajectory_shape():
    cfg = _fast_config()
    start = RobotState(0.0, 0.0, 0.0, 0.0, 0.0)
    traj = predict_trajectory(start, Control(0.5, 0.1), cfg)
    assert traj[0] == start
    assert len(traj) > 2
    assert all(p.v == 0.5 and p.w == 0.1 for p in traj[1:])
    assert trajectory_to_points(traj)[0] == (0.0, 0.0)


def test_obstacle_cost():
    cfg = Config()
    traj = [RobotState()]
    assert calculate_obstacle_cost(traj, [(2.0, 0.0)], cfg) == pytest.approx(0.5)
    assert calculate_obstacle_cost(traj, [(0.5, 0.0)], cfg) == math.inf
    rect = dataclasses.replace(cfg, robot_type=RobotType.RECTANGLE)
    assert calculate_obstacle_cost(traj, [(0.5, 0.0)], rect) == 0.0


def test_to_goal_cost():
    facing = [RobotState(0.0, 0.0, 0.0)]
    assert calculate_to_goal_cost(facing, (5.0, 0.0)) == pytest.approx(0.0)
    assert calculate_to_goal_cost(facing, (-5.0, 0.0)) == pytest.approx(math.pi)


def test_empty_window_keeps_zero_control():
    cfg = _fast_config()
    dw = DynamicWindow(0.0, 0.0, 0.0, 0.0)
    u, traj = calculate_control_and_trajectory(RobotState(), dw, cfg, (5.0, 0.0), [])
    assert u == Control(0.0, 0.0)
    assert traj == []


def test_dwa_moves_towards_goal():
    cfg = _fast_config()
    x = RobotState(0.0, 0.0, 0.0, 0.5, 0.0)
    u, traj = dwa_control(x, cfg, (10.0, 0.0), [(10.0, 10.0)])
    dw = calculate_dynamic_window(x, cfg)
    assert dw.vmin <= u.v < dw.vmax
    assert dw.yaw_rate_min <= u.w < dw.yaw_rate_max
    assert u.v > x.v
    assert traj[0] == x
    assert traj[-1].x > x.x