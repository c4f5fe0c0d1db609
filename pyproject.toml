[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "h3wire"
version = "0.1.0"
description = "HTTP/3 wire-format primitives: QUIC varints, stream and push ids, datagrams, settings and frames"
requires-python = ">=3.10"
dependencies = []
keywords = ["http3", "quic", "varint", "frames", "settings", "webtransport", "datagram"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["h3wire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
