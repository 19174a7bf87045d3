[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ghprofilestats"
version = "0.1.0"
description = "Collect GitHub account statistics over GraphQL and write them into profile SVG cards"
requires-python = ">=3.10"
keywords = ["github", "graphql", "statistics", "svg", "profile"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "requests>=2.28",
    "python-dotenv>=1.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
ghprofilestats = "ghprofilestats.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ghprofilestats"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
