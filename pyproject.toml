[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "walletapi"
version = "0.1.0"
description = "A small HTTP service for wallets and money transfers between them, backed by PostgreSQL and a Redis cache."
requires-python = ">=3.10"
keywords = ["wallet", "transactions", "transfers", "http", "api", "flask", "redis", "postgresql"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "flask",
    "sqlalchemy",
    "redis",
    "pyyaml",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
walletapi = "walletapi.server:main"

[tool.hatch.build.targets.wheel]
packages = ["walletapi"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
