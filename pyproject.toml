[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "a64kit"
version = "0.1.0"
description = "AArch64 instruction encoding, in-memory code patching, module layout discovery and tick/time-span arithmetic"
requires-python = ">=3.10"
dependencies = []
keywords = ["aarch64", "arm64", "armv8", "assembler", "encoding", "patching"]
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
    "Topic :: Software Development :: Assemblers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["a64kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
