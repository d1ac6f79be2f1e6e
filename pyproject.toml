[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "turfmastrand"
version = "0.1.0"
description = "Hole-order and pin-placement randomizer for the Neo Turf Masters P1 ROM, with a PCG32 random number generator"
requires-python = ">=3.10"
dependencies = []
keywords = ["randomizer", "rom", "neo-geo", "golf", "pcg", "random"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
turfmastrand = "turfmastrand.randomizer:main"
turfmastrand-pcg-demo = "turfmastrand.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["turfmastrand"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
