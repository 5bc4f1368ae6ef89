"""Motion-mode recognition (still, turning, straight) from raw IMU samples."""

from __future__ import annotations

import logging

import numpy as np

_log = logging.getLogger(__name__)

TURN_COUNT_INDICATOR = 5
"""Successive turning detections needed before a turn is confirmed."""


def _vec3(value, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"{name} must be a 3-vector, got shape {arr.shape}")
    return arr


def _smoothing(window: float) -> tuple[float, float]:
    """Weights (alpha, beta) of an exponential moving average over ``window`` samples."""
    if window > 1:
        return 1.0 / window, (window - 1.0) / window
    return 1.0, 0.0


class MotionRecognizer:
    """Classifies vehicle motion from exponential moving statistics of IMU increments.

    Stillness is declared when the deviation statistic of every accelerometer and
    gyroscope increment stays below its threshold. Turning is declared when the
    moving average of the squared gyroscope increment norm exceeds its threshold
    for several successive samples.
    """

    def __init__(
        self,
        n_still: float,
        n_turn: float,
        epsilon_acc_still_increment: float,
        epsilon_gyro_still_increment: float,
        mu_turn_gyro_increment_sq: float,
        sampling_interval: float,
    ) -> None:
        self.n_still = n_still
        self.n_turn = n_turn
        self.epsilon_acc_still = epsilon_acc_still_increment
        self.epsilon_gyro_still = epsilon_gyro_still_increment
        self.mu_turn_gyro_increment_sq = mu_turn_gyro_increment_sq
        self.sampling_interval = sampling_interval

        self._alpha_still, self._beta_still = _smoothing(n_still)
        self._alpha_turn, self._beta_turn = _smoothing(n_turn)

        self._means = np.zeros(6)
        self._deviation = np.zeros(6)
        self._still_initialized = False

        self._td = 0.0
        self._turn_initialized = False
        self._turn_count = 0

    @property
    def means(self) -> np.ndarray:
        """Moving means of the six increments (accelerometer then gyroscope)."""
        return self._means.copy()

    @property
    def deviations(self) -> np.ndarray:
        """Moving deviation statistics of the six increments."""
        return self._deviation.copy()

    @property
    def turn_detector(self) -> float:
        """Moving average of the squared gyroscope increment norm."""
        return self._td

    @property
    def successive_turn_count(self) -> int:
        """Number of successive samples whose turn statistic exceeded the threshold."""
        return self._turn_count

    def update(self, accel_raw, gyro_raw) -> None:
        """Feed one sample of specific force (m/s^2) and angular rate (rad/s)."""
        accel_inc = _vec3(accel_raw, "accel_raw") * self.sampling_interval
        gyro_inc = _vec3(gyro_raw, "gyro_raw") * self.sampling_interval
        increments = np.concatenate([accel_inc, gyro_inc])

        if not self._still_initialized:
            self._means = increments.copy()
            self._deviation = np.zeros(6)
            self._still_initialized = True
        else:
            self._means = self._beta_still * self._means + self._alpha_still * increments
            self._deviation = np.maximum(
                self._beta_still * self._deviation
                + self._alpha_still * (increments - self._means),
                0.0,
            )

        sum_sq = float(gyro_inc @ gyro_inc)
        if not self._turn_initialized:
            self._td = sum_sq
            self._turn_initialized = True
        else:
            self._td = self._beta_turn * self._td + self._alpha_turn * sum_sq

        if self._td > self.mu_turn_gyro_increment_sq:
            self._turn_count += 1
        else:
            self._turn_count = 0

        _log.debug("accel deviation: %s", self._deviation[:3])
        _log.debug("gyro deviation: %s", self._deviation[3:])
        _log.debug("turn detector: %f", self._td)

    def is_still(self) -> bool:
        """True when every increment deviation is below its threshold."""
        if not self._still_initialized:
            return False
        if np.any(self._deviation[:3] >= self.epsilon_acc_still):
            return False
        return not np.any(self._deviation[3:] >= self.epsilon_gyro_still)

    def is_turning(self) -> bool:
        """True once a turn has been detected for enough successive samples."""
        if not self._turn_initialized:
            return False
        return (
            self._turn_count >= TURN_COUNT_INDICATOR
            and self._td > self.mu_turn_gyro_increment_sq
        )

    def is_straight(self) -> bool:
        """True when the vehicle is neither still nor confirmed to be turning."""
        return not self.is_still() and not self.is_turning()