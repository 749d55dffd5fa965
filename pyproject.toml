[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "rmdb"
version = "0.1.0"
description = "Storage core of a small relational database: disk and buffer pool management, LRU replacement, catalog metadata and transaction records"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "buffer pool", "lru", "storage engine", "catalog", "transactions"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["rmdb*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
