[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "berder"
version = "0.1.0"
description = "ASN.1 BER/DER building blocks: tags, lengths, headers, content extraction and UTCTime"
requires-python = ">=3.10"
dependencies = []
keywords = ["asn1", "ber", "der", "x690", "utctime", "parser", "encoder"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["berder"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
