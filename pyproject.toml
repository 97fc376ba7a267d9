[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dalecspec"
version = "0.1.0"
description = "Declarative output and file checks for package test specifications"
requires-python = ">=3.10"
dependencies = []
keywords = ["testing", "packaging", "checks", "specification", "containers"]
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
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dalecspec"]

[tool.pytest.ini_options]
addopts = "-ra"
