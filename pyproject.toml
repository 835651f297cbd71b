[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mlxcore"
version = "0.1.0"
description = "Headless core of a small 2D graphics library: images, instances, render queue batching, XPM42 textures and font glyph lookup."
requires-python = ">=3.10"
dependencies = []
keywords = ["graphics", "2d", "image", "xpm", "render-queue", "sprites", "batching"]
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
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mlxcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
