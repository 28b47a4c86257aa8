[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskfiles"
version = "0.1.0"
description = "Load, merge and query Taskfile.yml task definitions"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["taskfile", "task runner", "build", "yaml"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
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
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["taskfiles"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
