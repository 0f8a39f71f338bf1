[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zitikit"
version = "0.1.0"
description = "Identity configuration, enrollment claims and the logic of small overlay-network tools: ping, chat, reflect, call and HTTP greeters"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "zero-trust",
    "overlay-network",
    "enrollment",
    "ping",
    "chat",
    "wsgi",
    "networking",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zitikit"]

[tool.hatch.build.targets.sdist]
include = ["zitikit", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
