[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bytebufs"
version = "0.1.0"
description = "Cheaply cloneable, sliceable byte buffers with shared storage and growable mutable views"
requires-python = ">=3.10"
dependencies = []
keywords = ["bytes", "buffer", "zero-copy", "networking", "slice", "reference-counting"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["bytebufs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
