"""Dynamic window approach for local velocity planning."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum


class RobotType(Enum):
    CIRCLE = "circle"
    RECTANGLE = "rectangle"


@dataclass
class Config:
    """Robot limits, sampling resolution and cost weights."""

    max_speed: float = 1.0
    min_speed: float = -0.5
    max_yawrate: float = math.radians(40.0)
    max_accel: float = 0.2
    max_dyawrate: float = math.radians(40.0)
    v_reso: float = 0.01
    yawrate_reso: float = math.radians(0.1)
    dt: float = 0.1
    predict_time: float = 3.0
    to_goal_cost_gain: float = 0.15
    speed_cost_gain: float = 1.0
    obstacle_cost_gain: float = 1.0
    robot_type: RobotType = RobotType.CIRCLE
    robot_radius: float = 1.0
    robot_width: float = 0.5
    robot_length: float = 1.2


@dataclass
class RobotState:
    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0
    v: float = 0.0
    w: float = 0.0


@dataclass
class Control:
    v: float = 0.0
    w: float = 0.0


@dataclass
class DynamicWindow:
    vmin: float
    vmax: float
    yaw_rate_min: float
    yaw_rate_max: float


def trajectory_to_points(traj):
    """The (x, y) positions of a trajectory."""
    return [(pose.x, pose.y) for pose in traj]


def motion(x, u, dt):
    """Advance a state by one step; heading is updated before position."""
    theta = x.theta + u.w * dt
    return RobotState(
        x=x.x + u.v * math.cos(theta) * dt,
        y=x.y + u.v * math.sin(theta) * dt,
        theta=theta,
        v=u.v,
        w=u.w,
    )


def calculate_dynamic_window(x, cfg):
    """Intersect the robot's limits with what is reachable in one step."""
    reach_v = cfg.max_accel * cfg.dt
    reach_w = cfg.max_dyawrate * cfg.dt
    return DynamicWindow(
        vmin=max(cfg.min_speed, x.v - reach_v),
        vmax=min(cfg.max_speed, x.v + reach_v),
        yaw_rate_min=max(-cfg.max_yawrate, x.w - reach_w),
        yaw_rate_max=min(cfg.max_yawrate, x.w + reach_w),
    )


def predict_trajectory(x_init, u, cfg):
    """Roll the control forward over the prediction horizon."""
    traj = [x_init]
    state = x_init
    time = 0.0
    while time <= cfg.predict_time:
        state = motion(state, u, cfg.dt)
        traj.append(state)
        time += cfg.dt
    return traj


def calculate_obstacle_cost(traj, obstacles, cfg):
    """Inverse of the closest obstacle distance; infinite on collision."""
    if cfg.robot_type is not RobotType.CIRCLE:
        # Collisions are only checked for a circular footprint.
        return 0.0
    min_r = sys.float_info.max
    for pose in traj:
        for ox, oy in obstacles:
            r = math.hypot(ox - pose.x, oy - pose.y)
            if r < cfg.robot_radius:
                return math.inf
            min_r = min(r, min_r)
    return 1.0 / min_r


def calculate_to_goal_cost(traj, goal):
    """Absolute heading error between the final pose and the goal direction."""
    last = traj[-1]
    gx, gy = goal
    error_angle = math.atan2(gy - last.y, gx - last.x)
    diff = error_angle - last.theta
    return abs(math.atan2(math.sin(diff), math.cos(diff)))


def calculate_control_and_trajectory(x, dw, cfg, goal, obstacles):
    """Search the window for the cheapest control and its trajectory."""
    min_cost = sys.float_info.max
    best_u = Control(0.0, 0.0)
    best_traj: list[RobotState] = []

    v = dw.vmin
    while v < dw.vmax:
        w = dw.yaw_rate_min
        while w < dw.yaw_rate_max:
            u = Control(v, w)
            traj = predict_trajectory(x, u, cfg)
            cost = (
                cfg.to_goal_cost_gain * calculate_to_goal_cost(traj, goal)
                + cfg.speed_cost_gain * (cfg.max_speed - traj[-1].v)
                + cfg.obstacle_cost_gain * calculate_obstacle_cost(traj, obstacles, cfg)
            )
            if cost < min_cost:
                min_cost = cost
                best_u = u
                best_traj = traj
            w += cfg.yawrate_reso
        v += cfg.v_reso

    return best_u, best_traj


def dwa_control(x, cfg, goal, obstacles):
    """Choose a control for state x towards goal, avoiding obstacles."""
    dw = calculate_dynamic_window(x, cfg)
    return calculate_control_and_trajectory(x, dw, cfg, goal, obstacles)