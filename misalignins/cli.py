"""Command-line demonstration of the GNSS/INS error-state filter."""

from __future__ import annotations

import argparse
import math

import numpy as np

from misalignins.earth import meridian_prime_vertical_radius
from misalignins.eskf import DEG_TO_RAD, GnssInsEskf


def _initial_covariance() -> np.ndarray:
    p = np.eye(11) * 0.1
    p[0, 0] = p[1, 1] = 10.0**2
    p[2, 2] = p[3, 3] = 1.0**2
    p[4, 4] = (5.0 * DEG_TO_RAD) ** 2
    p[5:8, 5:8] = np.eye(3) * (1e-2) ** 2
    p[8:11, 8:11] = np.eye(3) * (1e-3 * DEG_TO_RAD) ** 2
    return p


def _column(values) -> str:
    return "\n".join(f"{v:g}" for v in values)


def main(argv=None) -> int:
    """Run one second of prediction and a single GNSS update on synthetic data."""
    parser = argparse.ArgumentParser(
        prog="misalignins",
        description="Misalignment angle estimation for an arbitrarily mounted GNSS/INS.",
    )
    parser.parse_args(argv)

    print("Misalignment angle estimation for arbitrarily mounted vehicle GNSS/INS:")
    ekf = GnssInsEskf()
    ekf.initialize(_initial_covariance())

    accel_b = np.array([0.1, 0.05, -9.8])
    gyro_b = np.array([0.001, 0.002, 0.0005])
    c_b_n = np.eye(3)
    vel_ned = np.array([10.0, 1.0, 0.0])
    pos_llh = np.array([34.0 * DEG_TO_RAD, -118.0 * DEG_TO_RAD, 100.0])
    accel_bias = np.zeros(3)
    gyro_bias = np.zeros(3)
    dt = 0.01

    for _ in range(100):
        ekf.predict(accel_b, gyro_b, c_b_n, vel_ned, pos_llh, accel_bias, gyro_bias, dt)

    gnss_pos_llh = pos_llh.copy()
    gnss_pos_llh[0] += 0.5 / meridian_prime_vertical_radius(pos_llh[0])[0]
    gnss_heading = 0.0 * DEG_TO_RAD
    gnss_ground_speed = 10.05
    ins_yaw = math.atan2(c_b_n[1, 0], c_b_n[0, 0])

    ekf.update_gnss(pos_llh, vel_ned, ins_yaw, gnss_pos_llh, gnss_heading, gnss_ground_speed)

    print("Final error state dx:")
    print(_column(ekf.state_error))
    print("Final covariance P (diagonal):")
    print(" ".join(f"{v:g}" for v in np.diag(ekf.covariance)))

    corrected = ekf.apply_correction(pos_llh, vel_ned, c_b_n, accel_bias, gyro_bias)
    print("Corrected accelerometer bias:")
    print(_column(corrected.accel_bias_b))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())