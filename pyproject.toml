[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seamlog"
version = "0.1.0"
description = "Log abstractions, an in-memory log backend, log routing and key-span utilities for a distributed database"
requires-python = ">=3.10"
dependencies = []
keywords = ["log", "database", "key-range", "key-span", "asyncio", "distributed"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["seamlog"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
