"""Planar poses and angle helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Pose2D:
    """Position and heading in the plane."""

    x: float = 0.0
    y: float = 0.0
    theta: float = 0.0


def normalize_angle(angle):
    """Wrap an angle in radians into [-pi, pi)."""
    return (angle + math.pi) % (2.0 * math.pi) - math.pi