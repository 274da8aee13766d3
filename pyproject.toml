[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "molecule"
version = "0.8.0"
description = "Schema model, default encodings and test-vector code generation for the Molecule serialization format"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["molecule", "serialization", "schema", "codegen", "test-vectors"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["molecule"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
