[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "champkit"
version = "0.1.0"
description = "Building blocks for quadruped robot controllers: small matrices, robot components, URDF leg geometry and a message relay."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "robotics",
    "quadruped",
    "urdf",
    "matrix",
    "legged-robot",
    "imu",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
champkit-relay = "champkit.relay:main"

[tool.hatch.build.targets.wheel]
packages = ["champkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
