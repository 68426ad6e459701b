[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pluginsdk"
version = "0.1.0"
description = "Terminal UI primitives and component helpers for deployment-tool plugins"
requires-python = ">=3.10"
dependencies = []
keywords = ["plugin", "terminal", "ui", "spinner", "table", "sdk"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pluginsdk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
