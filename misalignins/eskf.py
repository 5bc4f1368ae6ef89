"""Loosely coupled GNSS/INS error-state Kalman filter with an 11-element error state.

Error state layout:

====  ==========================================
0     north position error (m)
1     east position error (m)
2     north velocity error (m/s)
3     east velocity error (m/s)
4     heading platform error about the down axis (rad)
5-7   accelerometer bias errors, body frame (m/s^2)
8-10  gyroscope bias errors, body frame (rad/s)
====  ==========================================
"""

from __future__ import annotations

import math
from typing import NamedTuple

import numpy as np

from misalignins.rotation import skew_symmetric

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi
EARTH_RADIUS_EQ = 6378137.0
"""WGS84 equatorial radius (m)."""
EARTH_ECCENTRICITY_SQ = 0.00669437999014
"""WGS84 first eccentricity squared."""
OMEGA_IE = 7.292115e-5
"""Earth rotation rate (rad/s)."""

STATE_SIZE = 11
MEASUREMENT_SIZE = 4

_EPS = 1e-6


def _vec3(value, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"{name} must be a 3-vector, got shape {arr.shape}")
    return arr


def _mat3(value, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"{name} must be a 3x3 matrix, got shape {arr.shape}")
    return arr


def _wrap_pi(angle: float) -> float:
    while angle > math.pi:
        angle -= 2.0 * math.pi
    while angle < -math.pi:
        angle += 2.0 * math.pi
    return angle


def radii(lat_rad: float) -> tuple[float, float]:
    """Meridian radius R_M and prime-vertical radius R_N (m) at ``lat_rad``."""
    sin_lat = math.sin(lat_rad)
    den_sq = max(1.0 - EARTH_ECCENTRICITY_SQ * sin_lat * sin_lat, 1e-6)
    den = math.sqrt(den_sq)
    r_m = EARTH_RADIUS_EQ * (1.0 - EARTH_ECCENTRICITY_SQ) / (den_sq * den)
    r_n = EARTH_RADIUS_EQ / den
    return r_m, r_n


class CorrectedState(NamedTuple):
    """Navigation state after the error estimate has been fed back."""

    pos_llh: np.ndarray
    vel_ned: np.ndarray
    c_b_n: np.ndarray
    accel_bias_b: np.ndarray
    gyro_bias_b: np.ndarray


def _default_process_noise() -> np.ndarray:
    vel_psd = (1e-2) ** 2
    att_psi_psd = (1e-4 * DEG_TO_RAD) ** 2
    accel_bias_psd = (1e-5) ** 2
    gyro_bias_psd = (1e-6 * DEG_TO_RAD) ** 2
    return np.diag(
        [0.0, 0.0, vel_psd, vel_psd, att_psi_psd]
        + [accel_bias_psd] * 3
        + [gyro_bias_psd] * 3
    )


def _default_measurement_noise() -> np.ndarray:
    return np.diag([2.0**2, 2.0**2, (0.5 * DEG_TO_RAD) ** 2, 0.5**2])


class GnssInsEskf:
    """Error-state EKF fusing GNSS position, heading and ground speed with an INS."""

    def __init__(self) -> None:
        self._dx = np.zeros(STATE_SIZE)
        self._p = np.eye(STATE_SIZE) * 0.1
        self.q_cont = _default_process_noise()
        """Continuous-time process noise power spectral densities."""
        self.r_gnss = _default_measurement_noise()
        """GNSS measurement noise: north, east (m), heading (rad), ground speed (m/s)."""

    @property
    def state_error(self) -> np.ndarray:
        """Copy of the current error-state vector."""
        return self._dx.copy()

    @property
    def covariance(self) -> np.ndarray:
        """Copy of the current error-state covariance."""
        return self._p.copy()

    def initialize(self, initial_p) -> None:
        """Reset the error state to zero and set the covariance."""
        p = np.array(initial_p, dtype=float)
        if p.shape != (STATE_SIZE, STATE_SIZE):
            raise ValueError(
                f"covariance must have shape {(STATE_SIZE, STATE_SIZE)}, got {p.shape}"
            )
        self._p = p
        self._dx = np.zeros(STATE_SIZE)

    def predict(
        self,
        accel_b,
        gyro_b,
        c_b_n,
        vel_ned,
        pos_llh,
        accel_bias_b,
        gyro_bias_b,
        dt: float,
    ) -> None:
        """Propagate the covariance over ``dt`` seconds."""
        accel_b = _vec3(accel_b, "accel_b")
        _vec3(gyro_b, "gyro_b")
        c_b_n = _mat3(c_b_n, "c_b_n")
        vel_ned = _vec3(vel_ned, "vel_ned")
        pos_llh = _vec3(pos_llh, "pos_llh")
        accel_bias_b = _vec3(accel_bias_b, "accel_bias_b")
        _vec3(gyro_bias_b, "gyro_bias_b")

        lat, h = pos_llh[0], pos_llh[2]
        r_m, r_n = radii(lat)
        f_n = c_b_n @ (accel_b - accel_bias_b)

        tan_lat = math.tan(lat)
        coriolis = 2.0 * OMEGA_IE * math.sin(lat)
        meridian_ok = r_m + h > _EPS
        prime_ok = r_n + h > _EPS

        f_c = np.zeros((STATE_SIZE, STATE_SIZE))
        f_c[0, 2] = 1.0
        f_c[1, 3] = 1.0

        f_c[2, 3] = -coriolis
        if prime_ok:
            f_c[2, 3] -= vel_ned[1] * tan_lat / (r_n + h)
        f_c[2, 4] = f_n[1]

        f_c[3, 2] = coriolis
        if prime_ok:
            f_c[3, 2] += vel_ned[1] * tan_lat / (r_n + h)
        if meridian_ok:
            f_c[3, 2] += vel_ned[0] / (r_m + h)
        f_c[3, 4] = -f_n[0]

        if meridian_ok:
            f_c[4, 2] = -1.0 / (r_m + h)
        if prime_ok:
            f_c[4, 3] = tan_lat / (r_n + h)

        f_c[2, 5:8] = -c_b_n[0]
        f_c[3, 5:8] = -c_b_n[1]
        f_c[4, 8:11] = -c_b_n[2]

        f_k = np.eye(STATE_SIZE) + f_c * dt
        self._p = f_k @ self._p @ f_k.T + self.q_cont * dt

    def update_gnss(
        self,
        ins_pos_llh,
        ins_vel_ned,
        ins_heading: float,
        gnss_pos_llh,
        gnss_heading: float,
        gnss_ground_speed: float,
    ) -> np.ndarray:
        """Fuse one GNSS fix and return the innovation ``[dN, dE, dPsi, dVg]``."""
        ins_pos_llh = _vec3(ins_pos_llh, "ins_pos_llh")
        ins_vel_ned = _vec3(ins_vel_ned, "ins_vel_ned")
        gnss_pos_llh = _vec3(gnss_pos_llh, "gnss_pos_llh")

        lat, lon, h = ins_pos_llh
        r_m, r_n = radii(lat)
        ins_speed = math.hypot(ins_vel_ned[0], ins_vel_ned[1])

        innovation = np.array(
            [
                (gnss_pos_llh[0] - lat) * (r_m + h),
                (gnss_pos_llh[1] - lon) * (r_n + h) * math.cos(lat),
                _wrap_pi(gnss_heading - ins_heading),
                gnss_ground_speed - ins_speed,
            ]
        )

        h_mat = np.zeros((MEASUREMENT_SIZE, STATE_SIZE))
        h_mat[0, 0] = 1.0
        h_mat[1, 1] = 1.0
        h_mat[2, 4] = 1.0
        if ins_speed > 1e-3:
            h_mat[3, 2] = ins_vel_ned[0] / ins_speed
            h_mat[3, 3] = ins_vel_ned[1] / ins_speed

        p = self._p
        s = h_mat @ p @ h_mat.T + self.r_gnss
        gain = p @ h_mat.T @ np.linalg.inv(s)

        self._dx = gain @ innovation
        i_kh = np.eye(STATE_SIZE) - gain @ h_mat
        self._p = i_kh @ p @ i_kh.T + gain @ self.r_gnss @ gain.T
        return innovation

    def apply_correction(
        self, pos_llh, vel_ned, c_b_n, accel_bias_b, gyro_bias_b
    ) -> CorrectedState:
        """Feed the error estimate back into the navigation state and reset it to zero."""
        pos = _vec3(pos_llh, "pos_llh").copy()
        vel = _vec3(vel_ned, "vel_ned").copy()
        cbn = _mat3(c_b_n, "c_b_n")
        accel_bias = _vec3(accel_bias_b, "accel_bias_b")
        gyro_bias = _vec3(gyro_bias_b, "gyro_bias_b")
        dx = self._dx

        lat, h = pos[0], pos[2]
        r_m, r_n = radii(lat)
        pos[0] -= dx[0] / (r_m + h)
        pos[1] -= dx[1] / ((r_n + h) * math.cos(lat))

        vel[0] -= dx[2]
        vel[1] -= dx[3]

        c_err = np.eye(3) - skew_symmetric([0.0, 0.0, dx[4]])
        corrected = c_err @ cbn
        u, _, vt = np.linalg.svd(corrected)
        corrected = u @ vt

        result = CorrectedState(
            pos_llh=pos,
            vel_ned=vel,
            c_b_n=corrected,
            accel_bias_b=accel_bias - dx[5:8],
            gyro_bias_b=gyro_bias - dx[8:11],
        )
        self._dx = np.zeros(STATE_SIZE)
        return result