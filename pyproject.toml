[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fbaskit"
version = "0.7.4"
description = "Core types and symmetry analysis for federated Byzantine agreement systems (FBASs)"
requires-python = ">=3.10"
dependencies = []
keywords = ["fbas", "quorum", "stellar", "consensus", "analysis"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Distributed Computing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fbaskit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
