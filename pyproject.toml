[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pathkit"
version = "0.1.0"
description = "Path planning and path tracking algorithms for mobile robots"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = [
    "robotics",
    "path planning",
    "path tracking",
    "a-star",
    "dijkstra",
    "rrt",
    "rrt-star",
    "prm",
    "potential field",
    "cubic spline",
    "quintic polynomial",
    "state lattice",
    "dynamic window approach",
    "stanley controller",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pathkit"]

[tool.pytest.ini_options]
addopts = "-ra"
