[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cminusf"
version = "0.1.0"
description = "Front end for the C-minus-f language: parse trees, abstract syntax trees, an AST printer and runtime I/O helpers"
requires-python = ">=3.10"
keywords = ["compiler", "ast", "syntax-tree", "cminus", "front-end"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cminusf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
