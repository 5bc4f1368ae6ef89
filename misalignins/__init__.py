"""GNSS/INS error-state filtering, WGS84 and attitude helpers, and IMU motion recognition."""

__version__ = "0.1.0"
__all__ = ["cli", "earth", "eskf", "gins", "models", "motion", "rotation"]