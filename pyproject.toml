[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "libmanager"
version = "0.1.0"
description = "A console library management system on SQLite: book catalogue, user accounts with roles, and book lending with late fees."
requires-python = ">=3.10"
dependencies = []
keywords = ["library", "books", "lending", "catalogue", "sqlite", "console"]
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
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
libmanager = "libmanager.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["libmanager"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
