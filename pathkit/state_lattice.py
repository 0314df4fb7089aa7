"""Terminal-state sampling for state lattice planners."""

from __future__ import annotations

import math
from itertools import accumulate

from pathkit.pose import Pose2D


def sample_states(angle_samples, a_min, a_max, d, p_max, p_min, nh):
    """Poses at distance d for each position sample, each with nh headings."""
    states: list[Pose2D] = []
    for sample in angle_samples:
        a = a_min + (a_max - a_min) * sample
        xf = d * math.cos(a)
        yf = d * math.sin(a)
        for j in range(nh):
            if nh == 1:
                yawf = (p_max - p_min) / 2.0 + a
            else:
                yawf = p_min + (p_max - p_min) * j / (nh - 1.0) + a
            states.append(Pose2D(xf, yf, yawf))
    return states


def calculate_uniform_polar_states(nxy, nh, d, a_min, a_max, p_min, p_max):
    """Poses at nxy evenly spaced position angles, each with nh headings."""
    if nxy < 2:
        raise ValueError("nxy must be at least 2")
    angle_samples = [i / (nxy - 1.0) for i in range(nxy)]
    return sample_states(angle_samples, a_min, a_max, d, p_max, p_min, nh)


def calculate_biased_polar_states(goal_angle, ns, nxy, nh, d, a_min, a_max, p_min, p_max):
    """Poses whose position angles are concentrated towards goal_angle."""
    if ns < 2:
        raise ValueError("ns must be at least 2")
    if nxy < 2:
        raise ValueError("nxy must be at least 2")

    angles = [a_min + (a_max - a_min) * i / (ns - 1.0) for i in range(ns - 1)]
    cnav = [math.pi - abs(a - goal_angle) for a in angles]
    cnav_sum = sum(cnav)
    cnav_max = max(cnav)
    denom = cnav_max * ns - cnav_sum
    cumsum = list(accumulate((cnav_max - c) / denom for c in cnav))

    samples: list[float] = []
    li = 0
    for i in range(nxy):
        target = i / (nxy - 1.0)
        for ii in range(max(li, 0), ns - 1):
            if ii * (1.0 / ns) >= target:
                samples.append(cumsum[ii])
                li = ii - 1
                break

    return sample_states(samples, a_min, a_max, d, p_max, p_min, nh)


def calculate_lane_states(l_center, l_heading, l_width, v_width, d, nxy):
    """nxy poses spread across a lane at longitudinal distance d, all along the lane heading."""
    if nxy < 2:
        raise ValueError("nxy must be at least 2")
    xc = d * math.cos(l_heading) + l_center * math.sin(l_heading)
    yc = d * math.sin(l_heading) + l_center * math.cos(l_heading)
    margin = l_width - v_width

    states: list[Pose2D] = []
    for i in range(nxy):
        delta = -0.5 * margin + margin * (i / (nxy - 1.0))
        states.append(
            Pose2D(
                xc - delta * math.sin(l_heading),
                yc + delta * math.cos(l_heading),
                l_heading,
            )
        )
    return states