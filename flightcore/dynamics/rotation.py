"""Quaternion and rotation-matrix utilities for attitude setpoints.

Quaternion convention:
- Scalar-first: q = [w, x, y, z] where w is the scalar part
- Active rotation: quaternion_to_dcm(q) maps body-frame vectors into the
  world frame, so its columns are the body axes expressed in world axes
- Canonical form: w >= 0 (one representative of the q / -q double cover)

World frame is East-North-Up with yaw measured counter-clockwise from +X.
"""

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

IDENTITY_QUATERNION = np.array([1.0, 0.0, 0.0, 0.0])


@beartype
def normalize_quaternion(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize a quaternion to unit length (identity if near zero)."""
    norm = np.linalg.norm(q)
    if norm < 1e-10:
        return IDENTITY_QUATERNION.copy()
    return q / norm


@beartype
def canonicalize_quaternion(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return the unit quaternion with a non-negative scalar part.

    q and -q describe the same rotation; setpoints always carry the
    representative with w >= 0 so consecutive commands never unwind.
    """
    q = normalize_quaternion(q)
    if q[0] < 0.0:
        return -q
    return q


@beartype
def quaternion_to_dcm(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert a quaternion to its 3x3 rotation matrix.

    Args:
        q: Quaternion [w, x, y, z]

    Returns:
        Rotation matrix R with R @ v_body = v_world
    """
    q = normalize_quaternion(q)
    w, x, y, z = q

    return np.array([
        [1 - 2*(y**2 + z**2), 2*(x*y - w*z), 2*(x*z + w*y)],
        [2*(x*y + w*z), 1 - 2*(x**2 + z**2), 2*(y*z - w*x)],
        [2*(x*z - w*y), 2*(y*z + w*x), 1 - 2*(x**2 + y**2)],
    ])


@beartype
def dcm_to_quaternion(dcm: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert a rotation matrix to a canonical quaternion.

    Uses Shepperd's method, picking the branch with the largest pivot so
    the division never approaches zero.

    Args:
        dcm: 3x3 proper rotation matrix

    Returns:
        Unit quaternion [w, x, y, z] with w >= 0
    """
    if dcm.shape != (3, 3):
        raise ValueError(f"Rotation matrix must be shape (3, 3), got {dcm.shape}")

    trace = np.trace(dcm)

    if trace > 0:
        s = 0.5 / np.sqrt(trace + 1.0)
        w = 0.25 / s
        x = (dcm[2, 1] - dcm[1, 2]) * s
        y = (dcm[0, 2] - dcm[2, 0]) * s
        z = (dcm[1, 0] - dcm[0, 1]) * s
    elif dcm[0, 0] > dcm[1, 1] and dcm[0, 0] > dcm[2, 2]:
        s = 2.0 * np.sqrt(1.0 + dcm[0, 0] - dcm[1, 1] - dcm[2, 2])
        w = (dcm[2, 1] - dcm[1, 2]) / s
        x = 0.25 * s
        y = (dcm[0, 1] + dcm[1, 0]) / s
        z = (dcm[0, 2] + dcm[2, 0]) / s
    elif dcm[1, 1] > dcm[2, 2]:
        s = 2.0 * np.sqrt(1.0 + dcm[1, 1] - dcm[0, 0] - dcm[2, 2])
        w = (dcm[0, 2] - dcm[2, 0]) / s
        x = (dcm[0, 1] + dcm[1, 0]) / s
        y = 0.25 * s
        z = (dcm[1, 2] + dcm[2, 1]) / s
    else:
        s = 2.0 * np.sqrt(1.0 + dcm[2, 2] - dcm[0, 0] - dcm[1, 1])
        w = (dcm[1, 0] - dcm[0, 1]) / s
        x = (dcm[0, 2] + dcm[2, 0]) / s
        y = (dcm[1, 2] + dcm[2, 1]) / s
        z = 0.25 * s

    return canonicalize_quaternion(np.array([w, x, y, z]))


@beartype
def dcm_to_euler(dcm: NDArray[np.float64]) -> tuple[float, float, float]:
    """Extract ZYX Euler angles (roll, pitch, yaw) from a rotation matrix."""
    roll = float(np.arctan2(dcm[2, 1], dcm[2, 2]))
    pitch = float(np.arcsin(np.clip(-dcm[2, 0], -1.0, 1.0)))
    yaw = float(np.arctan2(dcm[1, 0], dcm[0, 0]))
    return roll, pitch, yaw
