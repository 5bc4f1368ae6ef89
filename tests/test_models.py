import numpy as np
import pytest

from misalignins.models import GnssSample, ImuSample, Misalignment, NavigationState


def test_imu_sample_converts_lists():
    s = ImuSample(time=1.5, accel_raw=[0.1, 0.05, -9.8], gyro_raw=[1, 2, 3])
    assert s.time == 1.5
    assert np.array_equal(s.accel_raw, np.array([0.1, 0.05, -9.8]))
    assert s.gyro_raw.dtype == np.float64
    assert np.array_equal(s.gyro_raw, np.array([1.0, 2.0, 3.0]))


def test_imu_sample_rejects_bad_shape():
    with pytest.raises(ValueError):
        ImuSample(accel_raw=[1.0, 2.0])


def test_gnss_sample_defaults():
    g = GnssSample()
    assert g.valid is False
    assert np.array_equal(g.ll, np.zeros(2))
    assert g.vel == 0.0


def test_gnss_sample_rejects_bad_ll():
    with pytest.raises(ValueError):
        GnssSample(ll=[0.1, 0.2, 0.3])


def test_navigation_state_defaults():
    n = NavigationState()
    assert np.array_equal(n.cbn, np.eye(3))
    assert np.array_equal(n.attitude, np.zeros(3))
    assert n.vel == 0.0


def test_navigation_state_rejects_bad_cbn():
    with pytest.raises(ValueError):
        NavigationState(cbn=np.eye(2))


def test_misalignment_defaults():
    m = Misalignment()
    assert np.array_equal(m.cmb, np.eye(3))
    assert np.array_equal(m.angles, np.zeros(3))
    assert (m.valid, m.horizontal_estimated, m.heading_coarsely_estimated) == (
        False,
        False,
        False,
    )


def test_defaults_are_independent():
    a = Misalignment()
    b = Misalignment()
    a.cmb[0, 0] = 5.0
    assert b.cmb[0, 0] == 1.0


def test_misalignment_rejects_bad_angles():
    with pytest.raises(ValueError):
        Misalignment(angles=[0.0])