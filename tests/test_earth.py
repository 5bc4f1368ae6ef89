import math

import numpy as np
import pytest

from misalignins import earth
from misalignins.rotation import D2R

POINTS = [
    (34.0 * D2R, -118.0 * D2R, 100.0),
    (30.5 * D2R, 114.3 * D2R, 20.0),
    (-45.0 * D2R, 170.0 * D2R, 1500.0),
]


def test_gravity_at_equator_sea_level():
    assert earth.gravity([0.0, 0.0, 0.0]) == pytest.approx(9.7803267715)


def test_gravity_decreases_with_height_and_grows_with_latitude():
    assert earth.gravity([0.5, 0.0, 1000.0]) < earth.gravity([0.5, 0.0, 0.0])
    assert earth.gravity([1.0, 0.0, 0.0]) > earth.gravity([0.2, 0.0, 0.0])


def test_radii_at_equator():
    rm, rn = earth.meridian_prime_vertical_radius(0.0)
    assert rn == pytest.approx(earth.WGS84_RA)
    assert rm == pytest.approx(earth.WGS84_RA * (1 - earth.WGS84_E1))
    assert earth.rn(0.0) == pytest.approx(earth.WGS84_RA)


@pytest.mark.parametrize("lat", [0.1, 0.7, -1.2])
def test_rn_matches_prime_vertical_radius(lat):
    assert earth.rn(lat) == pytest.approx(earth.meridian_prime_vertical_radius(lat)[1])


@pytest.mark.parametrize("blh", POINTS)
def test_cne_is_rotation(blh):
    m = earth.cne(blh)
    assert np.allclose(m @ m.T, np.eye(3))
    assert np.linalg.det(m) == pytest.approx(1.0)


@pytest.mark.parametrize("blh", POINTS)
def test_qne_matches_cne(blh):
    assert np.allclose(earth.qne(blh).to_matrix(), earth.cne(blh))


@pytest.mark.parametrize("blh", POINTS)
def test_blh_from_qne_round_trip(blh):
    back = earth.blh_from_qne(earth.qne(blh), blh[2])
    assert np.allclose(back, blh)


@pytest.mark.parametrize("blh", POINTS)
def test_ecef_round_trip(blh):
    back = earth.ecef2blh(earth.blh2ecef(blh))
    assert back[0] == pytest.approx(blh[0], abs=1e-9)
    assert back[1] == pytest.approx(blh[1], abs=1e-9)
    assert back[2] == pytest.approx(blh[2], abs=1e-3)


def test_blh2ecef_on_equator_prime_meridian():
    assert np.allclose(earth.blh2ecef([0.0, 0.0, 0.0]), [earth.WGS84_RA, 0.0, 0.0])


@pytest.mark.parametrize("blh", POINTS)
def test_dr_and_dri_are_inverse(blh):
    assert np.allclose(earth.dr(blh) @ earth.dri(blh), np.eye(3))


@pytest.mark.parametrize("local", [(100.0, -50.0, 3.0), (-2000.0, 1500.0, -20.0)])
def test_local_global_round_trip(local):
    origin = POINTS[0]
    glob = earth.local2global(origin, local)
    assert np.allclose(earth.global2local(origin, glob), local, atol=1e-3)


def test_global2local_of_origin_is_zero():
    assert np.allclose(earth.global2local(POINTS[1], POINTS[1]), np.zeros(3))


def test_earth_rate_vectors():
    assert np.allclose(earth.iewe(), [0.0, 0.0, earth.WGS84_WIE])
    assert np.allclose(earth.iewn(0.0), [earth.WGS84_WIE, 0.0, 0.0])
    assert np.linalg.norm(earth.iewn(0.8)) == pytest.approx(earth.WGS84_WIE)


def test_iewn_is_cne_transpose_of_iewe():
    blh = POINTS[2]
    assert np.allclose(earth.cne(blh).T @ earth.iewe(), earth.iewn(blh[0]))


def test_bad_shape_rejected():
    with pytest.raises(ValueError):
        earth.cne([0.1, 0.2])
    assert math.isfinite(earth.gravity([0.1, 0.2, 0.0]))