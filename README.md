# pathkit

Path planning and path tracking algorithms for mobile robots, in plain Python
on top of NumPy.

## Installation

```
pip install .
```

To run the test suite, install the test extra and then run pytest:

```
pip install ".[test]"
pytest
```

## Planning

- `pathkit.cubic_spline`: `CubicSpline` (a natural cubic spline with
  `position`, `first_derivative` and `second_derivative`), `CubicSpline2D`
  (a planar curve parameterised by chord length, with `position`, `curvature`,
  `yaw` and the arc parameters in `s`) and `calculate_spline_course`, which
  samples a course every `ds` and returns a `SplineCourse` (`rx`, `ry`,
  `ryaw`, `rk`, `s`). Evaluating a spline outside its domain raises
  `ValueError`.
- `pathkit.quintic_polynomial`: `QuinticPolynomial` and
  `quintic_polynomial_planner`, which tries durations from `min_t` upward in
  steps of `t_res` and returns the first `QuinticTrajectory` that stays within
  `max_accel` and `max_jerk`, or an empty one if none does. Start and goal are
  given as `State` (x, y, yaw, v, a).
- `pathkit.dwa`: the dynamic window approach. `dwa_control(x, cfg, goal,
  obstacles)` returns the best `Control` and its predicted trajectory for a
  `RobotState`. `Config` holds the limits, resolutions and cost gains;
  obstacle cost is only computed for `RobotType.CIRCLE` and is zero for
  `RobotType.RECTANGLE`. `motion`, `predict_trajectory`,
  `calculate_dynamic_window`, `calculate_obstacle_cost`,
  `calculate_to_goal_cost`, `calculate_control_and_trajectory` and
  `trajectory_to_points` are available on their own.
- `pathkit.grid_search`: `Dijkstra` and `AStar` on an occupancy grid built
  from integer obstacle points inflated by the robot radius. `plan` returns the
  path from goal back to start as `(xs, ys)` and raises `ValueError` when the
  goal cannot be reached; `expanded_nodes` returns every node expanded so far.
- `pathkit.potential_field`: `PotentialField`, which descends the sum of an
  attractive and a repulsive potential over a grid. `plan` returns the visited
  points, start excluded, and raises `RuntimeError` when the descent is trapped.
- `pathkit.prm`: `ProbabilisticRoadmap` with a small brute-force `KDTree`
  (`query(x, y, k)` returns indices and distances, nearest first). `plan`
  returns the path from goal back to start, or two empty lists; `road_map`
  and `expanded_nodes` expose the edges and the search for inspection.
- `pathkit.state_lattice`: terminal-state sampling with `sample_states`,
  `calculate_uniform_polar_states`, `calculate_biased_polar_states` and
  `calculate_lane_states`, each returning a list of `Pose2D`.
- `pathkit.rrt` and `pathkit.rrt_star`: `RRT` and `RRTStar` among
  `CircleObstacle` discs. `plan` returns the path from the last node back
  towards the start, without the root, or two empty lists.

## Tracking

- `pathkit.move_to_pose`: `MoveToPoseController`. Set a target with
  `set_goal(Pose2D)`, call `move_to_pose(pose)` for a `Control` (v, w), and
  read `has_arrived`. The distance gain is taken from `kp_alpha`; `kp_rho` is
  accepted but not used.
- `pathkit.stanley_control`: `StanleyController`. Give it a path with
  `set_path(cx, cy, cyaw, target_vel)`, then call `compute_control` with a
  `VehicleState` (x, y, yaw, v, wheelbase) to get `(acceleration, steer)`.
  `has_arrived` turns true when the nearest path point is the last one.
- `pathkit.pose`: `Pose2D` and `normalize_angle`, which wraps an angle into
  [-pi, pi).

## Example

```python
from pathkit.cubic_spline import calculate_spline_course
from pathkit.grid_search import AStar

course = calculate_spline_course([0.0, 10.0, 20.0], [0.0, 5.0, 0.0], 0.1)
print(course.rx[:3], course.ryaw[:3])

# a square boundary of obstacle points
ox = [i for i in range(-10, 61)] + [60] * 71 + [i for i in range(-10, 61)] + [-10] * 71
oy = [-10] * 71 + [i for i in range(-10, 61)] + [60] * 71 + [i for i in range(-10, 61)]
planner = AStar(ox, oy, 2.0, 1.0)
rx, ry = planner.plan(10.0, 10.0, 50.0, 50.0)
```

The sampling planners (`ProbabilisticRoadmap`, `RRT` and `RRTStar`) take an
`rng` argument, which is passed to `numpy.random.default_rng`, so results can
be reproduced with a fixed seed.

## What it does not do

- It draws nothing: there is no plotting or animation. Planners return plain
  lists and dataclasses for you to display as you like.
- There is no command-line program; everything is used as a library.
- The state lattice module only samples terminal states. It does not optimise
  trajectories to reach them or build lookup tables.
- There is no model predictive controller and no localisation filters.