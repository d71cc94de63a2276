[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskpet"
version = "0.1.0"
description = "Desktop pet companion logic: gestures, affinity, status texts, WAV/track scanning and XiaoZhi protocol and activation helpers"
requires-python = ">=3.10"
keywords = ["desk pet", "voice assistant", "xiaozhi", "mcp", "gestures", "wav"]
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
    "Topic :: Home Automation",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["deskpet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
