[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "splib"
version = "0.1.0"
description = "Building blocks for small 2D games on pygame: input state, textures, fonts, sprite models and wave sound buffers"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "2d", "sprite", "pygame", "wave", "riff", "input"]
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
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["splib*"]

[tool.pytest.ini_options]
addopts = "-ra"
