"""flightcore - Numeric control core for small-vehicle flight controllers.

Converts a desired thrust vector into actuator commands (attitude setpoint,
throttle, per-motor throttle) and propagates vehicle dynamics in discrete
steps for onboard estimation and simulation.

Example:
    >>> import numpy as np
    >>> from flightcore import AttitudeThrottleConverter, MotorModel
    >>>
    >>> motor = MotorModel.from_linear(slope=0.3)
    >>> converter = AttitudeThrottleConverter(motor_model=motor)
    >>> setpoint = converter(np.array([0.0, 0.0, 2.0]), 0.0)
    >>> print(f"Throttle: {setpoint.throttle:.2f}")
    Throttle: 0.60
"""

__version__ = "0.1.0"

from flightcore import config
from flightcore.config import ControllerConfig
from flightcore.dynamics import (
    DiscreteTimeIntegrator,
    canonicalize_quaternion,
    dcm_to_euler,
    dcm_to_quaternion,
    quaternion_to_dcm,
    simulate,
)
from flightcore.gnc.control import (
    AttitudeSetpoint,
    AttitudeThrottleConverter,
    thrust_to_attitude_setpoint,
)
from flightcore.propulsion import MotorModel, thrust_to_throttle_linear

__all__ = [
    "__version__",
    "config",
    "ControllerConfig",
    # Dynamics
    "DiscreteTimeIntegrator",
    "simulate",
    "canonicalize_quaternion",
    "dcm_to_euler",
    "dcm_to_quaternion",
    "quaternion_to_dcm",
    # Propulsion
    "MotorModel",
    "thrust_to_throttle_linear",
    # Control
    "AttitudeSetpoint",
    "AttitudeThrottleConverter",
    "thrust_to_attitude_setpoint",
]
