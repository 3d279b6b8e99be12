[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tradesim"
version = "0.1.0"
description = "A small simulated limit order book with traders, market orders and P&L tracking."
requires-python = ">=3.10"
dependencies = []
keywords = ["trading", "order book", "simulation", "market", "pnl"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tradesim = "tradesim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tradesim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
