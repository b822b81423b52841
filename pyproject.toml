[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "huffarc"
version = "0.1.0"
description = "A Huffman-coding file archiver with archive, extract, list and check modes"
requires-python = ">=3.10"
dependencies = []
keywords = ["huffman", "archive", "compression", "archiver"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
huffarc = "huffarc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["huffarc"]

[tool.pytest.ini_options]
addopts = "-ra"
