[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pingwarden"
version = "0.1.0"
description = "Alert configuration and notification providers for endpoint health monitoring"
requires-python = ">=3.10"
keywords = ["monitoring", "alerting", "health-check", "pagerduty", "opsgenie", "matrix", "ntfy", "smtp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["pingwarden"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
