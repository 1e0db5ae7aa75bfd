"""Control algorithms for the vehicle command path.

Available:
    thrust_to_attitude_setpoint: Thrust vector + yaw -> attitude and throttle
    AttitudeThrottleConverter: Configured, shareable wrapper around it
"""

from flightcore.gnc.control.attitude import (
    AttitudeSetpoint,
    AttitudeThrottleConverter,
    thrust_to_attitude_setpoint,
)

__all__ = [
    "AttitudeSetpoint",
    "AttitudeThrottleConverter",
    "thrust_to_attitude_setpoint",
]
