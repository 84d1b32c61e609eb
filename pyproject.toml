[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wildgrid"
version = "0.0.2"
description = "A small top-down grid game: gather wood, lay logs and bridges, and keep clear of a wolf."
requires-python = ">=3.10"
keywords = ["game", "pygame", "grid", "top-down", "building"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
wildgrid = "wildgrid.app:main"

[tool.hatch.build.targets.wheel]
packages = ["wildgrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
