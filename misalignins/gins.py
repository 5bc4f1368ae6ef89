"""GNSS/INS integration for an arbitrarily mounted sensor with misalignment estimation."""

from __future__ import annotations

import numpy as np

from misalignins.eskf import GnssInsEskf
from misalignins.models import GnssSample, ImuSample, Misalignment, NavigationState
from misalignins.motion import MotionRecognizer

_N_STILL = 80.0
"""1.6 s stillness window at 20 ms sampling."""
_N_TURN = 50.0
"""1.0 s turning window at 20 ms sampling."""
_EPSILON_ACC_STILL_INCREMENT = 0.01 / 10.0
_EPSILON_GYRO_STILL_INCREMENT = 0.0004 / 10.0
_MU_TURN_GYRO_INCREMENT_SQ = 0.0005 / (10.0 * 10.0)


class ArbitrarilyMountedGins:
    """State of a GNSS/INS integration whose sensor frame is not aligned with the vehicle."""

    psi_m1_count_threshold = 15
    """Valid coarse heading estimates needed before the heading is accepted."""
    psi_m1_pos_error_threshold_alpha = 0.5
    """Position error threshold for coarse heading estimation."""
    psi_m1_integration_interval = 1.0
    """Integration interval (s) for coarse heading estimation."""

    def __init__(self, imu_sampling_interval: float) -> None:
        self.imu_dt = imu_sampling_interval
        self.is_initialized = False
        self.gnss_ekf_initialized = False

        self.last_imu = ImuSample()
        self.last_gnss = GnssSample()

        self.motion_recognizer = MotionRecognizer(
            _N_STILL,
            _N_TURN,
            _EPSILON_ACC_STILL_INCREMENT,
            _EPSILON_GYRO_STILL_INCREMENT,
            _MU_TURN_GYRO_INCREMENT_SQ,
            self.imu_dt,
        )
        self.ekf = GnssInsEskf()

        self.misalignment = Misalignment()
        self.cmm1 = np.eye(3)
        """Rotation from the sensor frame to the levelled sensor frame."""
        self.nav_state = NavigationState()
        self.accel_bias = np.zeros(3)
        self.gyro_bias = np.zeros(3)

        self.psi_m1 = 0.0
        """Estimated heading of the levelled sensor frame (rad)."""
        self.valid_psi_m1_estimation_count = 0