"""WGS84 earth model: gravity, curvature radii and frame conversions."""

from __future__ import annotations

import math

import numpy as np

from misalignins.rotation import Quaternion

WGS84_WIE = 7.2921151467e-5
"""Earth rotation rate (rad/s)."""
WGS84_F = 0.0033528106647474805
"""Flattening."""
WGS84_RA = 6378137.0000000000
"""Semi-major axis (m)."""
WGS84_RB = 6356752.3142451793
"""Semi-minor axis (m)."""
WGS84_GM0 = 398600441800000.00
"""Gravitational constant (m^3/s^2)."""
WGS84_E1 = 0.0066943799901413156
"""First eccentricity squared."""
WGS84_E2 = 0.0067394967422764341
"""Second eccentricity squared."""


def _vec3(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {arr.shape}")
    return arr


def gravity(blh) -> float:
    """Normal gravity (m/s^2) at latitude and height ``[lat, lon, h]``."""
    lat, _, h = _vec3(blh)
    sin2 = math.sin(lat) ** 2
    sin4 = sin2 * sin2
    gamma_a = 9.7803267715
    gamma_0 = gamma_a * (
        1
        + 0.0052790414 * sin2
        + 0.0000232718 * sin4
        + 0.0000001262 * sin2 * sin4
        + 0.0000000007 * sin4 * sin4
    )
    return gamma_0 - (3.0877e-6 - 4.3e-9 * sin2) * h + 0.72e-12 * h * h


def meridian_prime_vertical_radius(lat: float) -> np.ndarray:
    """Meridian radius RM and prime-vertical radius RN at ``lat``."""
    tmp = 1 - WGS84_E1 * math.sin(lat) ** 2
    sqrttmp = math.sqrt(tmp)
    return np.array([WGS84_RA * (1 - WGS84_E1) / (sqrttmp * tmp), WGS84_RA / sqrttmp])


def rn(lat: float) -> float:
    """Prime-vertical radius of curvature at ``lat``."""
    return WGS84_RA / math.sqrt(1.0 - WGS84_E1 * math.sin(lat) ** 2)


def cne(blh) -> np.ndarray:
    """DCM from the local NED frame to the ECEF frame."""
    lat, lon, _ = _vec3(blh)
    sinlat, coslat = math.sin(lat), math.cos(lat)
    sinlon, coslon = math.sin(lon), math.cos(lon)
    return np.array(
        [
            [-sinlat * coslon, -sinlon, -coslat * coslon],
            [-sinlat * sinlon, coslon, -coslat * sinlon],
            [coslat, 0.0, -sinlat],
        ]
    )


def qne(blh) -> Quaternion:
    """Quaternion from the local NED frame to the ECEF frame."""
    lat, lon, _ = _vec3(blh)
    coslon = math.cos(lon * 0.5)
    sinlon = math.sin(lon * 0.5)
    coslat = math.cos(-math.pi * 0.25 - lat * 0.5)
    sinlat = math.sin(-math.pi * 0.25 - lat * 0.5)
    return Quaternion(
        coslat * coslon, -sinlat * sinlon, sinlat * coslon, coslat * sinlon
    ).normalized()


def blh_from_qne(qne: Quaternion, height: float) -> np.ndarray:
    """Latitude and longitude recovered from an NED-to-ECEF quaternion, with ``height``."""
    return np.array(
        [
            -2 * math.atan(qne.y / qne.w) - math.pi * 0.5,
            2 * math.atan2(qne.z, qne.w),
            height,
        ]
    )


def blh2ecef(blh) -> np.ndarray:
    """Geodetic ``[lat, lon, h]`` to ECEF coordinates."""
    lat, lon, h = _vec3(blh)
    coslat, sinlat = math.cos(lat), math.sin(lat)
    coslon, sinlon = math.cos(lon), math.sin(lon)
    radius = rn(lat)
    rnh = radius + h
    return np.array(
        [rnh * coslat * coslon, rnh * coslat * sinlon, (rnh - radius * WGS84_E1) * sinlat]
    )


def ecef2blh(ecef) -> np.ndarray:
    """ECEF coordinates to geodetic ``[lat, lon, h]`` by fixed-point iteration."""
    x, y, z = _vec3(ecef)
    p = math.sqrt(x * x + y * y)
    lat = math.atan(z / (p * (1.0 - WGS84_E1)))
    lon = 2.0 * math.atan2(y, x + p)
    h = 0.0
    while True:
        previous = h
        radius = rn(lat)
        h = p / math.cos(lat) - radius
        lat = math.atan(z / (p * (1.0 - WGS84_E1 * radius / (radius + h))))
        if abs(h - previous) <= 1.0e-4:
            break
    return np.array([lat, lon, h])


def dri(blh) -> np.ndarray:
    """Matrix turning an NED displacement into a geodetic displacement."""
    lat, _, h = _vec3(blh)
    rm, rn_ = meridian_prime_vertical_radius(lat)
    return np.diag([1.0 / (rm + h), 1.0 / ((rn_ + h) * math.cos(lat)), -1.0])


def dr(blh) -> np.ndarray:
    """Matrix turning a geodetic displacement into an NED displacement."""
    lat, _, h = _vec3(blh)
    rm, rn_ = meridian_prime_vertical_radius(lat)
    return np.diag([rm + h, (rn_ + h) * math.cos(lat), -1.0])


def local2global(origin, local) -> np.ndarray:
    """Local NED coordinates about ``origin`` to geodetic coordinates."""
    ecef1 = blh2ecef(origin) + cne(origin) @ _vec3(local)
    return ecef2blh(ecef1)


def global2local(origin, global_blh) -> np.ndarray:
    """Geodetic coordinates to local NED coordinates about ``origin``."""
    return cne(origin).T @ (blh2ecef(global_blh) - blh2ecef(origin))


def iewe() -> np.ndarray:
    """Earth rotation rate in the ECEF frame."""
    return np.array([0.0, 0.0, WGS84_WIE])


def iewn(lat: float) -> np.ndarray:
    """Earth rotation rate in the NED frame at ``lat``."""
    return np.array([WGS84_WIE * math.cos(lat), 0.0, -WGS84_WIE * math.sin(lat)])