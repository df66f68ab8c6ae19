[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liftsim"
version = "5.5.1"
description = "Real-time simulation of a building's elevator groups, passengers and waiting-time statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["elevator", "lift", "simulation", "scheduling", "statistics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["liftsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
