"""Motor thrust -> throttle model.

Maps commanded thrust to normalized throttle with a fitted polynomial:

    throttle = c0 + c1 * T + c2 * T^2 + ...

evaluated elementwise, then clamped to the motor's [min, max] range.
Setting min_bound == max_bound (the (0, 0) default) disables the clamp.

Example:
    >>> import numpy as np
    >>> from flightcore.propulsion import MotorModel
    >>>
    >>> motor = MotorModel.from_linear(slope=0.3)
    >>> motor(np.array([1.0, 3.0, 2.0])).round(6)
    array([0.3, 0.9, 0.6])
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Core Numba Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _clamp(x: float, lo: float, hi: float) -> float:
    """Clamp scalar to range [lo, hi]."""
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


@njit(cache=True, fastmath=True)
def _horner(coeffs: NDArray[np.float64], x: float) -> float:
    """Evaluate a low-to-high coefficient polynomial at x."""
    acc = 0.0
    for j in range(coeffs.shape[0] - 1, -1, -1):
        acc = acc * x + coeffs[j]
    return acc


@njit(cache=True, fastmath=True)
def _polyval_clamped(
    coeffs: NDArray[np.float64],
    thrust: NDArray[np.float64],
    lo: float,
    hi: float,
    clamp: bool,
    out: NDArray[np.float64],
) -> None:
    """Evaluate the polynomial on each thrust component into out."""
    for i in range(thrust.shape[0]):
        value = _horner(coeffs, thrust[i])
        if clamp:
            value = _clamp(value, lo, hi)
        out[i] = value


# =============================================================================
# Motor Model
# =============================================================================


@beartype
@dataclass(frozen=True)
class MotorModel:
    """Polynomial thrust -> throttle curve with output clamp.

    Attributes:
        coefficients: Polynomial coefficients, constant term first
        min_bound: Lower throttle clamp
        max_bound: Upper throttle clamp (equal bounds disable clamping)
    """
    coefficients: Sequence[float | int]
    min_bound: float = 0.0
    max_bound: float = 0.0

    _coeffs: NDArray[np.float64] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate coefficients and cache them as a read-only array."""
        object.__setattr__(self, "coefficients", tuple(float(c) for c in self.coefficients))
        if not self.coefficients:
            raise ValueError("Motor model needs at least one coefficient")

        coeffs = np.array(self.coefficients, dtype=np.float64)
        if not np.all(np.isfinite(coeffs)):
            raise ValueError(f"Coefficients must be finite, got {self.coefficients}")
        if self.min_bound > self.max_bound:
            raise ValueError(
                f"min_bound ({self.min_bound}) must not exceed max_bound ({self.max_bound})"
            )
        coeffs.setflags(write=False)
        object.__setattr__(self, "_coeffs", coeffs)

    @classmethod
    def from_linear(
        cls,
        slope: float,
        intercept: float = 0.0,
        min_bound: float = 0.0,
        max_bound: float = 0.0,
    ) -> "MotorModel":
        """Create a two-term model: throttle = intercept + slope * thrust."""
        return cls(
            coefficients=(intercept, slope),
            min_bound=min_bound,
            max_bound=max_bound,
        )

    @property
    def degree(self) -> int:
        """Polynomial degree."""
        return len(self.coefficients) - 1

    @property
    def bounded(self) -> bool:
        """True when the output clamp is active."""
        return self.min_bound != self.max_bound

    @beartype
    def __call__(self, thrust: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map per-axis (or per-motor) thrust to throttle.

        Args:
            thrust: Thrust vector, typically shape (3,); negative components
                are evaluated like any other value

        Returns:
            Throttle vector with the same shape as thrust
        """
        thrust = np.ascontiguousarray(thrust, dtype=np.float64)
        if thrust.ndim != 1:
            raise ValueError(f"Thrust must be a 1-D vector, got shape {thrust.shape}")
        if not np.all(np.isfinite(thrust)):
            raise ValueError(f"Thrust must be finite, got {thrust}")

        out = np.empty_like(thrust)
        _polyval_clamped(self._coeffs, thrust, self.min_bound, self.max_bound, self.bounded, out)
        return out

    @beartype
    def throttle(self, thrust: float) -> float:
        """Map a scalar thrust (e.g. total thrust magnitude) to throttle."""
        if not np.isfinite(thrust):
            raise ValueError(f"Thrust must be finite, got {thrust}")
        value = _horner(self._coeffs, float(thrust))
        if self.bounded:
            value = _clamp(value, self.min_bound, self.max_bound)
        return float(value)


@beartype
def thrust_to_throttle_linear(
    thrust: NDArray[np.float64],
    slope: float,
    intercept: float = 0.0,
) -> NDArray[np.float64]:
    """Linear thrust -> throttle map, slope * thrust + intercept, unclamped."""
    return slope * np.asarray(thrust, dtype=np.float64) + intercept
