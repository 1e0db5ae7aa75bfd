"""Thrust vector -> attitude setpoint and throttle conversion.

Turns the thrust vector requested by the position loop into the command pair
consumed by the attitude controller: a desired orientation whose body Z axis
points along the thrust, and a scalar throttle.

Frame convention (world East-North-Up, body Z along thrust):
1. body_z = thrust / |thrust|, or world +Z when |thrust| is below epsilon
2. y_C = [-sin(yaw), cos(yaw), 0] is the yaw heading rotated by +90 deg
3. body_x = normalize(y_C x body_z), flipped when body_z points down so the
   nose stays forward while inverted; world +Z when the thrust is horizontal
4. body_y = body_z x body_x
5. R = [body_x | body_y | body_z], quaternion canonicalized to w >= 0

This is flight software - designed to run on the vehicle.

Example:
    >>> import numpy as np
    >>> from flightcore.gnc.control import AttitudeThrottleConverter
    >>>
    >>> converter = AttitudeThrottleConverter(throttle_max=10.0)
    >>> setpoint = converter(np.array([1.0, 3.0, 2.0]), 1.0)
    >>> setpoint.quaternion.round(4)
    array([ 0.7435, -0.3079,  0.3714,  0.463 ])
"""

import logging
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from flightcore import config
from flightcore.dynamics.rotation import dcm_to_euler, dcm_to_quaternion, quaternion_to_dcm
from flightcore.propulsion.motor_model import MotorModel

logger = logging.getLogger(__name__)

# =============================================================================
# Attitude Setpoint
# =============================================================================


@beartype
@dataclass(frozen=True)
class AttitudeSetpoint:
    """Attitude and throttle command for the attitude controller.

    Attributes:
        quaternion: Desired attitude [w, x, y, z], body -> world, w >= 0
        throttle: Throttle command, clamped to the converter's range
        euler: Desired attitude as ZYX (roll, pitch, yaw) [rad]
        thrust_direction: Unit body Z axis in world frame
        degenerate: True when the thrust was too small to define a direction
    """
    quaternion: NDArray[np.float64]
    throttle: float
    euler: tuple[float, float, float]
    thrust_direction: NDArray[np.float64]
    degenerate: bool = False

    @property
    def dcm(self) -> NDArray[np.float64]:
        """Rotation matrix whose columns are the desired body axes."""
        return quaternion_to_dcm(self.quaternion)

    @property
    def euler_deg(self) -> tuple[float, float, float]:
        """Desired (roll, pitch, yaw) in degrees."""
        r, p, y = self.euler
        return float(np.degrees(r)), float(np.degrees(p)), float(np.degrees(y))


# =============================================================================
# Conversion
# =============================================================================


def _desired_body_axes(
    body_z: NDArray[np.float64],
    yaw: float,
) -> NDArray[np.float64]:
    """Build the desired rotation matrix from body Z and yaw reference."""
    y_c = np.array([-np.sin(yaw), np.cos(yaw), 0.0])

    if abs(body_z[2]) > config.HORIZONTAL_EPSILON:
        body_x = np.cross(y_c, body_z)
        if body_z[2] < 0.0:
            body_x = -body_x
        body_x = body_x / np.linalg.norm(body_x)
    else:
        # Yaw is unobservable with horizontal thrust; pin body X to world up
        logger.debug("Horizontal thrust direction %s, yaw reference ignored", body_z)
        body_x = np.array([0.0, 0.0, 1.0])

    body_y = np.cross(body_z, body_x)
    return np.column_stack([body_x, body_y, body_z])


@beartype
def thrust_to_attitude_setpoint(
    thrust_vector: NDArray[np.float64],
    yaw_reference: float,
    motor_model: MotorModel | None = None,
    throttle_min: float = config.THROTTLE_MIN,
    throttle_max: float = config.THROTTLE_MAX,
    thrust_epsilon: float = config.THRUST_EPSILON,
) -> AttitudeSetpoint:
    """Convert a desired thrust vector and yaw into an attitude setpoint.

    Args:
        thrust_vector: Desired thrust in world frame, shape (3,)
        yaw_reference: Desired heading [rad], counter-clockwise from world +X
        motor_model: Thrust magnitude -> throttle curve (None = identity)
        throttle_min: Lower throttle limit, also the zero-thrust command
        throttle_max: Upper throttle limit
        thrust_epsilon: Thrust magnitude below which the direction is undefined

    Returns:
        AttitudeSetpoint with quaternion, throttle and Euler angles

    Raises:
        ValueError: If the thrust is not a finite 3-vector, the yaw is not
            finite, throttle_min > throttle_max, or thrust_epsilon < 0
    """
    thrust = np.asarray(thrust_vector, dtype=np.float64)
    if thrust.shape != (3,):
        raise ValueError(f"Thrust vector must be shape (3,), got {thrust.shape}")
    if not np.all(np.isfinite(thrust)):
        raise ValueError(f"Thrust vector must be finite, got {thrust}")
    if not np.isfinite(yaw_reference):
        raise ValueError(f"Yaw reference must be finite, got {yaw_reference}")
    if throttle_min > throttle_max:
        raise ValueError(
            f"throttle_min ({throttle_min}) must not exceed throttle_max ({throttle_max})"
        )
    if thrust_epsilon < 0.0:
        raise ValueError(f"thrust_epsilon must be non-negative, got {thrust_epsilon}")

    magnitude = float(np.linalg.norm(thrust))
    degenerate = magnitude <= thrust_epsilon

    if degenerate:
        logger.debug(
            "Thrust magnitude %.3g below %.3g, commanding upright attitude", magnitude, thrust_epsilon
        )
        body_z = np.array([0.0, 0.0, 1.0])
        throttle = throttle_min
    else:
        body_z = thrust / magnitude
        raw = motor_model.throttle(magnitude) if motor_model is not None else magnitude
        throttle = float(np.clip(raw, throttle_min, throttle_max))

    dcm = _desired_body_axes(body_z, yaw_reference)

    return AttitudeSetpoint(
        quaternion=dcm_to_quaternion(dcm),
        throttle=throttle,
        euler=dcm_to_euler(dcm),
        thrust_direction=body_z,
        degenerate=degenerate,
    )


# =============================================================================
# Converter
# =============================================================================


@beartype
@dataclass(frozen=True)
class AttitudeThrottleConverter:
    """Configured thrust -> attitude/throttle converter.

    Immutable once built, so one instance can serve several control loops.

    Attributes:
        motor_model: Thrust magnitude -> throttle curve (None = identity)
        throttle_min: Lower throttle limit, also the zero-thrust command
        throttle_max: Upper throttle limit
        thrust_epsilon: Degenerate thrust threshold
    """
    motor_model: MotorModel | None = None
    throttle_min: float = config.THROTTLE_MIN
    throttle_max: float = config.THROTTLE_MAX
    thrust_epsilon: float = config.THRUST_EPSILON

    def __post_init__(self) -> None:
        if self.throttle_min > self.throttle_max:
            raise ValueError(
                f"throttle_min ({self.throttle_min}) must not exceed "
                f"throttle_max ({self.throttle_max})"
            )
        if self.thrust_epsilon < 0.0:
            raise ValueError(f"thrust_epsilon must be non-negative, got {self.thrust_epsilon}")

    def convert(
        self,
        thrust_vector: NDArray[np.float64],
        yaw_reference: float,
    ) -> AttitudeSetpoint:
        """Compute the attitude setpoint for a thrust vector and yaw."""
        return thrust_to_attitude_setpoint(
            thrust_vector,
            yaw_reference,
            motor_model=self.motor_model,
            throttle_min=self.throttle_min,
            throttle_max=self.throttle_max,
            thrust_epsilon=self.thrust_epsilon,
        )

    __call__ = convert
