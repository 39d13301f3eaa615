[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lowballtable"
version = "1.0.0"
description = "Terminal 2-7 triple draw lowball table: scripted hand replay, animations and a binary wire format"
requires-python = ">=3.10"
dependencies = []
keywords = ["poker", "lowball", "2-7", "triple draw", "terminal", "animation", "card game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lowballtable = "lowballtable.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["lowballtable"]

[tool.pytest.ini_options]
addopts = "-ra"
