[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wage_engine"
version = "0.1.0"
description = "Payroll calculation engine with pluggable regional tax calculators and a small HTTP API"
requires-python = ">=3.10"
dependencies = []
keywords = ["payroll", "wages", "tax", "accounting", "wsgi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wage-engine = "wage_engine.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["wage_engine"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
