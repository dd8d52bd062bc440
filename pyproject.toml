[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "optengine"
version = "0.1.0"
description = "Options that read their arguments from moving positions in two texts: readers, a grammar entry registry, polymorphic arithmetic, variables, branches and loops."
requires-python = ">=3.10"
dependencies = []
keywords = ["interpreter", "options", "grammar", "text-processing", "engine"]
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
    "Topic :: Software Development :: Interpreters",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["optengine"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
