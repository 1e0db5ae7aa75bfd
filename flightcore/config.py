"""Default parameters for the flight-control numeric core.

Module-level constants are the firmware defaults; ControllerConfig bundles
the subset that a vehicle overrides and builds the runtime objects from it.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields

from beartype import beartype

# =============================================================================
# Thrust -> attitude conversion
# =============================================================================

# Below this thrust magnitude the direction is undefined; fall back to upright
THRUST_EPSILON = 1e-5

# |body_z.z| below this means the thrust lies in the horizontal plane
HORIZONTAL_EPSILON = 1e-6

# Normalized throttle range
THROTTLE_MIN = 0.0
THROTTLE_MAX = 1.0

# =============================================================================
# Motor model
# =============================================================================

# Linear thrust -> throttle fit, constant term first
MOTOR_INTERCEPT = 0.0
MOTOR_SLOPE = 0.3

# Equal bounds disable clamping inside the motor model
MOTOR_MIN_BOUND = 0.0
MOTOR_MAX_BOUND = 0.0

# =============================================================================
# State integrator
# =============================================================================

INTEGRATOR_MAX_BOUND = 100.0
INTEGRATOR_MIN_BOUND = -100.0


@beartype
@dataclass
class ControllerConfig:
    """Vehicle-level configuration for the command path.

    Attributes:
        motor_coefficients: Thrust -> throttle polynomial, constant term first.
            Empty means throttle equals thrust magnitude.
        motor_min_bound: Motor model lower clamp
        motor_max_bound: Motor model upper clamp (equal bounds = unclamped)
        throttle_min: Lower limit on the throttle command
        throttle_max: Upper limit on the throttle command
        thrust_epsilon: Degenerate thrust threshold
    """
    motor_coefficients: Sequence[float | int] = field(
        default_factory=lambda: (MOTOR_INTERCEPT, MOTOR_SLOPE)
    )
    motor_min_bound: float = MOTOR_MIN_BOUND
    motor_max_bound: float = MOTOR_MAX_BOUND
    throttle_min: float = THROTTLE_MIN
    throttle_max: float = THROTTLE_MAX
    thrust_epsilon: float = THRUST_EPSILON

    def __post_init__(self) -> None:
        self.motor_coefficients = tuple(float(c) for c in self.motor_coefficients)
        if self.throttle_min > self.throttle_max:
            raise ValueError(
                f"throttle_min ({self.throttle_min}) must not exceed "
                f"throttle_max ({self.throttle_max})"
            )
        if self.thrust_epsilon < 0.0:
            raise ValueError(f"thrust_epsilon must be non-negative, got {self.thrust_epsilon}")

    @classmethod
    def from_dict(cls, values: Mapping[str, object]) -> "ControllerConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}. Valid: {sorted(known)}")
        return cls(**values)

    def create_motor_model(self):
        """Create the motor model, or None when no curve is configured."""
        from flightcore.propulsion.motor_model import MotorModel

        if not self.motor_coefficients:
            return None
        return MotorModel(
            coefficients=self.motor_coefficients,
            min_bound=self.motor_min_bound,
            max_bound=self.motor_max_bound,
        )

    def create_converter(self):
        """Create the thrust -> attitude/throttle converter."""
        from flightcore.gnc.control.attitude import AttitudeThrottleConverter

        return AttitudeThrottleConverter(
            motor_model=self.create_motor_model(),
            throttle_min=self.throttle_min,
            throttle_max=self.throttle_max,
            thrust_epsilon=self.thrust_epsilon,
        )
