[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cmakefinch"
version = "0.1.0"
description = "Lexer, syntax tree nodes and CPM.cmake package command recognition for CMake scripts"
requires-python = ">=3.10"
dependencies = []
keywords = ["cmake", "cpm", "lexer", "tokenizer", "syntax-tree", "build"]
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
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cmakefinch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
