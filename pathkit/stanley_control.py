"""Stanley lateral controller with proportional speed control."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from pathkit.pose import normalize_angle


@dataclass
class VehicleState:
    """Rear-axle position, heading, speed and wheelbase of a bicycle-model car."""

    x: float
    y: float
    yaw: float
    v: float
    wheelbase: float


@dataclass
class _Path:
    cx: list[float] = field(default_factory=list)
    cy: list[float] = field(default_factory=list)
    cyaw: list[float] = field(default_factory=list)


class StanleyController:
    """Tracks a reference path by steering on heading and cross-track error."""

    def __init__(self, control_gain, speed_gain):
        self.control_gain = control_gain
        self.speed_gain = speed_gain
        self._path = _Path()
        self._target_vel = 0.0
        self._tracking_idx = -1
        self._has_arrived = True

    @property
    def has_arrived(self) -> bool:
        """Whether the end of the path has been reached."""
        return self._has_arrived

    def set_path(self, cx, cy, cyaw, target_vel):
        """Set the reference path and the speed to hold along it."""
        if not (len(cx) == len(cy) == len(cyaw)):
            raise ValueError("path coordinate lists must have the same length")
        self._path = _Path(list(cx), list(cy), list(cyaw))
        self._target_vel = target_vel
        self._has_arrived = False

    def compute_control(self, state):
        """Return (acceleration, steering angle) for the given vehicle state."""
        path = self._path
        if not path.cx:
            raise ValueError("no path has been set")

        accel = self.speed_gain * (self._target_vel - state.v)

        fx = state.x + state.wheelbase * math.cos(state.yaw)
        fy = state.y + state.wheelbase * math.sin(state.yaw)

        idx = min(
            range(len(path.cx)),
            key=lambda i: math.hypot(fx - path.cx[i], fy - path.cy[i]),
        )

        if idx == len(path.cx) - 1:
            self._has_arrived = True
            return 0.0, 0.0

        normal = state.yaw + math.pi / 2.0
        front_axle_error = (
            -math.cos(normal) * (fx - path.cx[idx]) - math.sin(normal) * (fy - path.cy[idx])
        )

        if idx >= self._tracking_idx:
            self._tracking_idx = idx

        theta_e = normalize_angle(path.cyaw[self._tracking_idx] - state.yaw)
        theta_d = math.atan2(self.control_gain * front_axle_error, state.v)
        return accel, theta_e + theta_d