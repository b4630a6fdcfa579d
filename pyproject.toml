[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bscpeer"
version = "0.1.0"
description = "BNB Smart Chain peer building blocks: boot nodes, hardforks, fork ids, the handshake upgrade status and block-tracking state"
requires-python = ">=3.10"
dependencies = []
keywords = ["bsc", "bnb-smart-chain", "p2p", "devp2p", "rlp", "hardfork", "fork-id", "blockchain"]
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
    "Framework :: AsyncIO",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["bscpeer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
