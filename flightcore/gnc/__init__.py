"""GNC (Guidance, Navigation, Control) module.

Only the control side lives here: the conversion from the thrust vector
produced by guidance into attitude and throttle commands.
"""

from flightcore.gnc.control import (
    AttitudeSetpoint,
    AttitudeThrottleConverter,
    thrust_to_attitude_setpoint,
)

__all__ = [
    "AttitudeSetpoint",
    "AttitudeThrottleConverter",
    "thrust_to_attitude_setpoint",
]
