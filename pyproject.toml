[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adminsdk"
version = "0.1.0"
description = "Building blocks for admin web back ends: request context, JSON responses, claims, captcha store, connection settings and utilities"
requires-python = ">=3.10"
dependencies = [
    "bcrypt",
]
keywords = ["admin", "web", "sdk", "jwt", "captcha", "response", "sharding"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["adminsdk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
