[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cbcorex"
version = "0.1.0"
description = "Core building blocks for a Couchbase client: memcached binary protocol codec, range scan encoding, SCRAM authentication, vbucket routing and retry orchestration"
requires-python = ">=3.10"
dependencies = []
keywords = ["couchbase", "memcached", "binary-protocol", "vbucket", "scram", "database"]
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
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cbcorex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
