[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "doomkit"
version = "0.1.0"
description = "A printf-style formatter with its own flag semantics and a BMP texture loader"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmp", "bitmap", "texture", "printf", "formatting", "rle"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["doomkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
