[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "walletsys"
version = "0.1.0"
description = "Wallet service core: users, balances, transfers and transaction rankings"
requires-python = ">=3.10"
keywords = ["wallet", "balance", "transfer", "jwt", "singleflight", "cache"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "pyjwt",
    "cryptography",
    "redis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["walletsys"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
