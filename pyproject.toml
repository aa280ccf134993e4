[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "brainstorm"
version = "0.1.0"
description = "A brainfuck interpreter and interactive debugger"
requires-python = ">=3.10"
dependencies = []
keywords = ["brainfuck", "interpreter", "debugger", "esoteric"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
brainstorm = "brainstorm.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["brainstorm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
