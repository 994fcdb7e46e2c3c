[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mogview"
version = "0.1.0"
description = "Instant synchronous channels, effects and server-side HTML node rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["channels", "reactive", "effects", "html", "server-side rendering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Text Processing :: Markup :: HTML",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["mogview"]

[tool.pytest.ini_options]
addopts = "-ra"
