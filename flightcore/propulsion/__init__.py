"""Propulsion module: motor thrust -> throttle curves.

Example:
    >>> from flightcore.propulsion import MotorModel
    >>>
    >>> motor = MotorModel(coefficients=[0.05, 0.25, 0.01], min_bound=0.0, max_bound=1.0)
    >>> throttle = motor.throttle(2.0)
"""

from flightcore.propulsion.motor_model import (
    MotorModel,
    thrust_to_throttle_linear,
)

__all__ = [
    "MotorModel",
    "thrust_to_throttle_linear",
]
