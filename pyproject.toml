[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "m17spot"
version = "0.1.4"
description = "Building blocks for an M17-only hotspot: callsign coding, convolutional FEC, link setup frames, MMDVM modem framing and host lists"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "m17",
    "amateur-radio",
    "ham-radio",
    "hotspot",
    "mmdvm",
    "digital-voice",
    "viterbi",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["m17spot"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
