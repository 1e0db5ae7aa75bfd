"""Unit tests for quaternion and rotation-matrix utilities."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from flightcore.dynamics.rotation import (
    canonicalize_quaternion,
    dcm_to_euler,
    dcm_to_quaternion,
    normalize_quaternion,
    quaternion_to_dcm,
)


def rot_x(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])


def rot_y(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])


def rot_z(angle):
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


# =============================================================================
# Quaternion Operations
# =============================================================================


class TestQuaternionOperations:
    """Test quaternion normalization and sign handling."""

    def test_normalize_unit_length(self):
        q = normalize_quaternion(np.array([1.0, 2.0, 3.0, 4.0]))
        assert_allclose(np.linalg.norm(q), 1.0, atol=1e-12)

    def test_normalize_zero_is_identity(self):
        """A zero quaternion normalizes to identity instead of NaN."""
        q = normalize_quaternion(np.zeros(4))
        assert_allclose(q, [1.0, 0.0, 0.0, 0.0])

    def test_canonical_sign(self):
        """Canonical form has w >= 0 and describes the same rotation."""
        q = normalize_quaternion(np.array([-0.5, 0.5, -0.5, 0.5]))
        c = canonicalize_quaternion(q)
        assert_allclose(c, [0.5, -0.5, 0.5, -0.5])
        assert_allclose(quaternion_to_dcm(c), quaternion_to_dcm(q), atol=1e-12)

    def test_canonical_keeps_positive(self):
        q = normalize_quaternion(np.array([0.9, 0.1, -0.2, 0.3]))
        assert_allclose(canonicalize_quaternion(q), q)


# =============================================================================
# Rotation Matrices
# =============================================================================


class TestRotationMatrix:
    """Test DCM conversions against explicit single-axis matrices."""

    def test_dcm_orthonormal(self):
        dcm = quaternion_to_dcm(normalize_quaternion(np.array([1.0, 2.0, 3.0, 4.0])))
        assert_allclose(dcm @ dcm.T, np.eye(3), atol=1e-12)
        assert_allclose(np.linalg.det(dcm), 1.0, atol=1e-12)

    def test_yaw_rotates_x_to_y(self):
        """+90 deg yaw maps body X onto world Y (active rotation)."""
        q = np.array([np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4)])
        dcm = quaternion_to_dcm(q)
        assert_allclose(dcm, rot_z(np.pi / 2), atol=1e-12)
        assert_allclose(dcm @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize("dcm, expected", [
        (np.eye(3), [1.0, 0.0, 0.0, 0.0]),
        (rot_z(0.8), [np.cos(0.4), 0.0, 0.0, np.sin(0.4)]),
        # Half turns land on the x, y and z pivot branches
        (rot_x(np.pi), [0.0, 1.0, 0.0, 0.0]),
        (rot_y(np.pi), [0.0, 0.0, 1.0, 0.0]),
        (rot_z(np.pi), [0.0, 0.0, 0.0, 1.0]),
        (rot_x(3.0), [np.cos(1.5), np.sin(1.5), 0.0, 0.0]),
        (rot_y(-3.0), [np.cos(1.5), 0.0, -np.sin(1.5), 0.0]),
    ])
    def test_dcm_to_quaternion_branches(self, dcm, expected):
        """Every Shepperd branch recovers the known quaternion."""
        q = dcm_to_quaternion(dcm)

        assert q[0] >= 0.0
        # Half turns have w == 0, where q and -q are both canonical
        if abs(q[0]) < 1e-12 and np.dot(q, expected) < 0.0:
            q = -q
        assert_allclose(q, expected, atol=1e-12)

    def test_dcm_to_quaternion_composite(self):
        """Composite rotation maps back onto the same matrix."""
        dcm = rot_z(2.1) @ rot_y(0.6) @ rot_x(-0.3)
        assert_allclose(quaternion_to_dcm(dcm_to_quaternion(dcm)), dcm, atol=1e-12)

    def test_dcm_to_quaternion_canonical(self):
        """A 300 deg yaw comes back as the equivalent -60 deg quaternion."""
        q = dcm_to_quaternion(rot_z(np.radians(300.0)))
        assert_allclose(q, [np.cos(np.radians(30.0)), 0.0, 0.0, -0.5], atol=1e-12)

    def test_dcm_wrong_shape(self):
        with pytest.raises(ValueError, match="shape"):
            dcm_to_quaternion(np.eye(4))


# =============================================================================
# Euler Angles
# =============================================================================


class TestEulerAngles:
    """Test ZYX Euler extraction."""

    def test_identity(self):
        assert_allclose(dcm_to_euler(np.eye(3)), [0.0, 0.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize("dcm, expected", [
        (rot_x(0.4), [0.4, 0.0, 0.0]),
        (rot_y(np.pi / 4), [0.0, np.pi / 4, 0.0]),
        (rot_z(-2.5), [0.0, 0.0, -2.5]),
    ])
    def test_single_axis(self, dcm, expected):
        assert_allclose(dcm_to_euler(dcm), expected, atol=1e-12)

    def test_zyx_sequence(self):
        """R = Rz(yaw) Ry(pitch) Rx(roll) unpacks into (roll, pitch, yaw)."""
        roll, pitch, yaw = np.radians([30.0, 45.0, 60.0])
        dcm = rot_z(yaw) @ rot_y(pitch) @ rot_x(roll)
        assert_allclose(dcm_to_euler(dcm), [roll, pitch, yaw], atol=1e-10)

    def test_through_quaternion(self):
        roll, pitch, yaw = -0.3, 0.6, 2.1
        q = dcm_to_quaternion(rot_z(yaw) @ rot_y(pitch) @ rot_x(roll))
        assert_allclose(dcm_to_euler(quaternion_to_dcm(q)), [roll, pitch, yaw], atol=1e-10)
