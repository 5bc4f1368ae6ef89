import numpy as np
import pytest

from misalignins.motion import TURN_COUNT_INDICATOR, MotionRecognizer


def _recognizer(n_still=80.0, n_turn=50.0):
    return MotionRecognizer(n_still, n_turn, 0.001, 0.00004, 0.0005 / 100.0, 0.02)


def test_fresh_recognizer_is_neither_still_nor_turning():
    rec = _recognizer()
    assert rec.is_still() is False
    assert rec.is_turning() is False
    assert rec.is_straight() is True


def test_constant_input_is_still():
    rec = _recognizer()
    for _ in range(20):
        rec.update([0.0, 0.0, -9.8], [0.0, 0.0, 0.0])
    assert rec.is_still() is True
    assert rec.is_straight() is False
    np.testing.assert_allclose(rec.deviations, np.zeros(6))
    np.testing.assert_allclose(rec.means[:3], [0.0, 0.0, -9.8 * 0.02])


def test_first_update_sets_means_to_increments():
    rec = _recognizer()
    rec.update([1.0, 2.0, 3.0], [0.1, 0.2, 0.3])
    np.testing.assert_allclose(rec.means, np.array([1.0, 2.0, 3.0, 0.1, 0.2, 0.3]) * 0.02)
    assert rec.turn_detector == pytest.approx((0.1**2 + 0.2**2 + 0.3**2) * 0.02**2)


def test_acceleration_jump_breaks_stillness():
    rec = _recognizer(n_still=2.0)
    rec.update([0.0, 0.0, 0.0], [0.0, 0.0, 0.0])
    rec.update([10.0, 0.0, 0.0], [0.0, 0.0, 0.0])
    assert rec.deviations[0] > 0.0
    assert rec.is_still() is False


def test_negative_deviation_clamped_to_zero():
    rec = _recognizer(n_still=2.0)
    rec.update([10.0, 10.0, 10.0], [1.0, 1.0, 1.0])
    rec.update([0.0, 0.0, 0.0], [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(rec.deviations, np.zeros(6))
    np.testing.assert_allclose(rec.means, [0.1, 0.1, 0.1, 0.01, 0.01, 0.01])
    assert rec.is_still() is True


def test_turn_confirmed_after_successive_detections():
    rec = _recognizer()
    gyro = [0.0, 0.0, 1.0]
    for _ in range(TURN_COUNT_INDICATOR - 1):
        rec.update([0.0, 0.0, -9.8], gyro)
    assert rec.is_turning() is False
    rec.update([0.0, 0.0, -9.8], gyro)
    assert rec.successive_turn_count == TURN_COUNT_INDICATOR
    assert rec.is_turning() is True
    assert rec.is_straight() is False


def test_turn_count_resets_when_below_threshold():
    rec = _recognizer(n_turn=1.0)
    for _ in range(3):
        rec.update([0.0, 0.0, 0.0], [0.0, 0.0, 1.0])
    assert rec.successive_turn_count == 3
    rec.update([0.0, 0.0, 0.0], [0.0, 0.0, 0.0])
    assert rec.successive_turn_count == 0
    assert rec.is_turning() is False


def test_rejects_bad_shapes():
    rec = _recognizer()
    with pytest.raises(ValueError):
        rec.update([1.0, 2.0], [0.0, 0.0, 0.0])