"""Proportional controller that drives a unicycle to a target pose."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathkit.pose import Pose2D

_ARRIVAL_DISTANCE = 0.1
_ARRIVAL_ANGLE = math.radians(5.0)


@dataclass
class Control:
    """Linear and angular velocity command."""

    v: float = 0.0
    w: float = 0.0


def _wrap(angle: float) -> float:
    return math.fmod(angle + math.pi, 2.0 * math.pi) - math.pi


class MoveToPoseController:
    """Steers towards a goal pose using distance and bearing errors."""

    def __init__(self, kp_rho, kp_alpha, kp_beta):
        # The distance gain is taken from kp_alpha, as in the reference controller.
        self._kp_rho = kp_alpha
        self._kp_alpha = kp_alpha
        self._kp_beta = kp_beta
        self._goal = Pose2D()
        self._arrived = False

    @property
    def has_arrived(self) -> bool:
        """Whether the last command found the robot at the goal."""
        return self._arrived

    def set_goal(self, goal):
        """Set the pose to drive to."""
        self._goal = goal

    def move_to_pose(self, curr):
        """Command that moves the robot at pose curr towards the goal."""
        dx = self._goal.x - curr.x
        dy = self._goal.y - curr.y

        rho = math.hypot(dx, dy)
        alpha = _wrap(math.atan2(dy, dx) - curr.theta)
        beta = _wrap(self._goal.theta - curr.theta - alpha)
        angle_diff = _wrap(self._goal.theta - curr.theta)

        if rho < _ARRIVAL_DISTANCE and abs(angle_diff) < _ARRIVAL_ANGLE:
            self._arrived = True
            return Control(0.0, 0.0)

        v = self._kp_rho * rho
        w = self._kp_alpha * alpha + self._kp_beta * beta
        if alpha > math.pi / 2.0 or alpha < -math.pi / 2.0:
            v = -v
        return Control(v, w)