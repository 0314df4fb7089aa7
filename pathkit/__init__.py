"""Path planning (splines, quintic polynomials, DWA, grid search, potential
fields, PRM, state lattice sampling, RRT and RRT*) and path tracking
(move-to-pose and Stanley controllers) for mobile robots."""

__version__ = "0.1.0"