[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "twophase"
version = "0.1.0"
description = "An in-memory two-phase commit coordinator with store and delivery participants for food orders"
requires-python = ">=3.10"
dependencies = []
keywords = ["two-phase commit", "2pc", "distributed transactions", "coordinator", "orders"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
twophase = "twophase.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["twophase"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
