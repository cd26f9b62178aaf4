[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audiometa"
version = "0.1.0"
description = "Read tags, technical properties and chapters from MP3, Ogg Vorbis and Ogg Opus audio files"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "audio",
    "metadata",
    "tags",
    "id3",
    "id3v2",
    "mp3",
    "ogg",
    "vorbis",
    "opus",
    "chapters",
    "audiobook",
]
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
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["audiometa"]

[tool.hatch.build.targets.sdist]
include = ["audiometa", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
