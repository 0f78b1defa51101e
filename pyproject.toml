[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dvpack"
version = "0.1.0"
description = "Read, validate and write DV (IEC 61834 / SMPTE 306M) timecode and VAUX packs"
requires-python = ">=3.10"
dependencies = []
keywords = ["dv", "video", "timecode", "vaux", "aaux", "iec-61834", "smpte-306m"]
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
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dvpack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
