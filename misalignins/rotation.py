"""Attitude representations: quaternions, direction cosine matrices, Euler angles."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

D2R = math.pi / 180.0
"""Degrees to radians."""
R2D = 180.0 / math.pi
"""Radians to degrees."""

_log = logging.getLogger(__name__)


def _vec3(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {arr.shape}")
    return arr


def _mat3(value) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3, 3):
        raise ValueError(f"expected a 3x3 matrix, got shape {arr.shape}")
    return arr


@dataclass(frozen=True)
class Quaternion:
    """Hamilton quaternion ``w + xi + yj + zk``."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def vec(self) -> np.ndarray:
        """Vector part as a 3-array."""
        return np.array([self.x, self.y, self.z])

    def as_array(self) -> np.ndarray:
        """Components in the order ``[w, x, y, z]``."""
        return np.array([self.w, self.x, self.y, self.z])

    def norm(self) -> float:
        return math.sqrt(self.w**2 + self.x**2 + self.y**2 + self.z**2)

    def normalized(self) -> Quaternion:
        """Unit quaternion in the same direction; a zero quaternion is returned unchanged."""
        n = self.norm()
        if n == 0.0:
            return self
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def to_matrix(self) -> np.ndarray:
        """Rotation matrix of a unit quaternion."""
        w, x, y, z = self.w, self.x, self.y, self.z
        return np.array(
            [
                [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
                [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
                [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
            ]
        )

    def __mul__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        v1, v2 = self.vec, other.vec
        w = self.w * other.w - float(v1 @ v2)
        v = self.w * v2 + other.w * v1 + np.cross(v1, v2)
        return Quaternion(w, float(v[0]), float(v[1]), float(v[2]))


def matrix_to_quaternion(matrix) -> Quaternion:
    """Quaternion of a rotation matrix."""
    m = _mat3(matrix)
    trace = m[0, 0] + m[1, 1] + m[2, 2]
    if trace > 0:
        t = math.sqrt(trace + 1.0)
        w = 0.5 * t
        t = 0.5 / t
        return Quaternion(
            w,
            (m[2, 1] - m[1, 2]) * t,
            (m[0, 2] - m[2, 0]) * t,
            (m[1, 0] - m[0, 1]) * t,
        )
    i = 0
    if m[1, 1] > m[0, 0]:
        i = 1
    if m[2, 2] > m[i, i]:
        i = 2
    j = (i + 1) % 3
    k = (j + 1) % 3
    t = math.sqrt(m[i, i] - m[j, j] - m[k, k] + 1.0)
    q = [0.0, 0.0, 0.0]
    q[i] = 0.5 * t
    t = 0.5 / t
    w = (m[k, j] - m[j, k]) * t
    q[j] = (m[j, i] + m[i, j]) * t
    q[k] = (m[k, i] + m[i, k]) * t
    return Quaternion(float(w), float(q[0]), float(q[1]), float(q[2]))


def quaternion_to_matrix(quaternion: Quaternion) -> np.ndarray:
    return quaternion.to_matrix()


def matrix_to_euler(dcm) -> np.ndarray:
    """ZYX Euler angles ``[roll, pitch, yaw]`` of a body-to-navigation DCM; yaw in [0, 2*pi)."""
    m = _mat3(dcm)
    pitch = math.atan(-m[2, 0] / math.sqrt(m[2, 1] ** 2 + m[2, 2] ** 2))

    if m[2, 0] <= -0.999:
        roll = 0.0
        yaw = math.atan2(m[1, 2] - m[0, 1], m[0, 2] + m[1, 1])
        _log.warning("Singular Euler angle; roll set to 0")
    elif m[2, 0] >= 0.999:
        roll = 0.0
        yaw = math.pi + math.atan2(m[1, 2] + m[0, 1], m[0, 2] - m[1, 1])
        _log.warning("Singular Euler angle; roll set to 0")
    else:
        roll = math.atan2(m[2, 1], m[2, 2])
        yaw = math.atan2(m[1, 0], m[0, 0])

    if yaw < 0:
        yaw += 2 * math.pi
    return np.array([roll, pitch, yaw])


def quaternion_to_euler(quaternion: Quaternion) -> np.ndarray:
    return matrix_to_euler(quaternion.to_matrix())


def rotvec_to_quaternion(rotvec) -> Quaternion:
    """Quaternion of a rotation vector (axis times angle)."""
    v = _vec3(rotvec)
    angle = float(np.linalg.norm(v))
    if angle == 0.0:
        return Quaternion()
    axis = v / angle
    s = math.sin(angle / 2)
    return Quaternion(math.cos(angle / 2), s * axis[0], s * axis[1], s * axis[2])


def quaternion_to_rotvec(quaternion: Quaternion) -> np.ndarray:
    """Rotation vector of a quaternion, with angle in [0, pi]."""
    vec = quaternion.vec
    n = float(np.linalg.norm(vec))
    if n == 0.0:
        return np.zeros(3)
    angle = 2.0 * math.atan2(n, abs(quaternion.w))
    axis = vec / n if quaternion.w >= 0 else -vec / n
    return angle * axis


def _axis_rotation(axis: int, angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    if axis == 0:
        return np.array([[1, 0, 0], [0, c, -s], [0, s, c]], dtype=float)
    if axis == 1:
        return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]], dtype=float)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]], dtype=float)


def euler_to_matrix(euler) -> np.ndarray:
    """Body-to-navigation DCM from ``[roll, pitch, yaw]`` in ZYX order."""
    roll, pitch, yaw = _vec3(euler)
    return _axis_rotation(2, yaw) @ _axis_rotation(1, pitch) @ _axis_rotation(0, roll)


def euler_to_quaternion(euler) -> Quaternion:
    """Quaternion from ``[roll, pitch, yaw]`` in ZYX order."""
    roll, pitch, yaw = _vec3(euler)
    qz = Quaternion(math.cos(yaw / 2), 0.0, 0.0, math.sin(yaw / 2))
    qy = Quaternion(math.cos(pitch / 2), 0.0, math.sin(pitch / 2), 0.0)
    qx = Quaternion(math.cos(roll / 2), math.sin(roll / 2), 0.0, 0.0)
    return qz * qy * qx


def skew_symmetric(vector) -> np.ndarray:
    """Cross-product matrix: ``skew_symmetric(a) @ b == cross(a, b)``."""
    x, y, z = _vec3(vector)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def quaternion_left(q: Quaternion) -> np.ndarray:
    """Matrix L with ``L @ p.as_array() == (q * p).as_array()``."""
    ans = np.empty((4, 4))
    ans[0, 0] = q.w
    ans[0, 1:] = -q.vec
    ans[1:, 0] = q.vec
    ans[1:, 1:] = q.w * np.eye(3) + skew_symmetric(q.vec)
    return ans


def quaternion_right(p: Quaternion) -> np.ndarray:
    """Matrix R with ``R @ q.as_array() == (q * p).as_array()``."""
    ans = np.empty((4, 4))
    ans[0, 0] = p.w
    ans[0, 1:] = -p.vec
    ans[1:, 0] = p.vec
    ans[1:, 1:] = p.w * np.eye(3) - skew_symmetric(p.vec)
    return ans