"""Sensor samples and navigation state records."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _as_array(value, shape: tuple[int, ...], name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != shape:
        raise ValueError(f"{name} must have shape {shape}, got {arr.shape}")
    return arr


def _zeros3() -> np.ndarray:
    return np.zeros(3)


def _zeros2() -> np.ndarray:
    return np.zeros(2)


def _identity3() -> np.ndarray:
    return np.eye(3)


@dataclass
class ImuSample:
    """Raw IMU sample in the sensor frame: specific force (m/s^2) and angular rate (rad/s)."""

    time: float = 0.0
    accel_raw: np.ndarray = field(default_factory=_zeros3)
    gyro_raw: np.ndarray = field(default_factory=_zeros3)

    def __post_init__(self) -> None:
        self.accel_raw = _as_array(self.accel_raw, (3,), "accel_raw")
        self.gyro_raw = _as_array(self.gyro_raw, (3,), "gyro_raw")


@dataclass
class GnssSample:
    """GNSS fix: latitude/longitude (rad), ground speed (m/s) and track heading (rad)."""

    time: float = 0.0
    ll: np.ndarray = field(default_factory=_zeros2)
    vel: float = 0.0
    heading: float = 0.0
    valid: bool = False

    def __post_init__(self) -> None:
        self.ll = _as_array(self.ll, (2,), "ll")


@dataclass
class NavigationState:
    """Vehicle navigation state with attitude as Euler angles and body-to-navigation DCM."""

    time: float = 0.0
    ll: np.ndarray = field(default_factory=_zeros2)
    vel: float = 0.0
    attitude: np.ndarray = field(default_factory=_zeros3)
    cbn: np.ndarray = field(default_factory=_identity3)

    def __post_init__(self) -> None:
        self.ll = _as_array(self.ll, (2,), "ll")
        self.attitude = _as_array(self.attitude, (3,), "attitude")
        self.cbn = _as_array(self.cbn, (3, 3), "cbn")


@dataclass
class Misalignment:
    """Mounting angles of the sensor frame relative to the body frame, and their DCM."""

    angles: np.ndarray = field(default_factory=_zeros3)
    cmb: np.ndarray = field(default_factory=_identity3)
    valid: bool = False
    horizontal_estimated: bool = False
    heading_coarsely_estimated: bool = False

    def __post_init__(self) -> None:
        self.angles = _as_array(self.angles, (3,), "angles")
        self.cmb = _as_array(self.cmb, (3, 3), "cmb")