[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "punchy"
version = "0.1.0"
description = "Game rules, asset metadata loading and configuration for a 2.5D side-scrolling beat 'em up."
requires-python = ">=3.10"
keywords = ["game", "beat-em-up", "side-scroller", "yaml", "assets"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
punchy = "punchy.game:main"

[tool.hatch.build.targets.wheel]
packages = ["punchy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
