[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "qlcore"
version = "0.1.0"
description = "Core pieces of a Sinclair QL emulator: memory, opcode table, ROM patching, IPC keyboard, SuperBASIC extension tables and serial helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["sinclair", "ql", "qdos", "emulator", "68000", "minerva", "superbasic"]
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["qlcore*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
