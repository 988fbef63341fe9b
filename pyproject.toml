[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rttrutil"
version = "0.1.0"
description = "Logging writers, UTF-8 helpers, temporary files, IPv4 parsing and framed message queues"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "utf8", "cp1252", "tempfile", "ipv4", "messaging", "sockets"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rttrutil"]

[tool.pytest.ini_options]
addopts = "-ra"
