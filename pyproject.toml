[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "karm"
version = "0.1.0"
description = "Layout geometry, a widget tree, text helpers and readers for font, ELF, ACPI, EFI and boot handover data"
requires-python = ">=3.10"
dependencies = []
keywords = ["layout", "widgets", "easing", "ttf", "elf", "acpi", "efi", "handover"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["karm"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
