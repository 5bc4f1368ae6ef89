[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "misalignins"
version = "0.1.0"
description = "GNSS/INS error-state Kalman filter, WGS84 and attitude helpers, and IMU motion recognition for vehicles with an arbitrarily mounted IMU"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["gnss", "ins", "kalman filter", "eskf", "imu", "misalignment", "navigation", "wgs84"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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
test = [
    "pytest",
]

[project.scripts]
misalignins = "misalignins.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["misalignins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
