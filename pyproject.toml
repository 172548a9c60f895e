[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deploystate"
version = "0.1.0"
description = "Start and stop applications across deployment foundations, with lifecycle events and error reporting"
requires-python = ">=3.10"
dependencies = []
keywords = ["deployment", "cloud foundry", "start", "stop", "events", "orchestration"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["deploystate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
