[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "odnelazm"
version = "1.0.0b3"
description = "Scraper and parser for Kenyan parliamentary hansard sittings published by Mzalendo, with a command line tool and an MCP server"
requires-python = ">=3.10"
keywords = [
    "hansard",
    "parliament",
    "kenya",
    "senate",
    "national-assembly",
    "scraper",
    "parser",
    "mcp",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    "Topic :: Text Processing :: Markup :: HTML",
]
dependencies = [
    "httpx>=0.27",
    "beautifulsoup4>=4.12",
]

[project.optional-dependencies]
test = [
    "pytest>=8.0",
    "pytest-asyncio>=0.23",
    "respx>=0.21",
]

[project.scripts]
odnelazm = "odnelazm.cli:main"
odnelazm-mcp = "odnelazm.mcp:main"

[tool.hatch.build.targets.wheel]
packages = ["odnelazm"]

[tool.hatch.build.targets.sdist]
include = ["odnelazm", "tests"]

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
