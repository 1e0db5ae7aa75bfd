"""Saturating discrete-time state integrator.

Advances an N-dimensional state with forward Euler steps and clamps every
component to a fixed [min, max] range after each step:

    x[k+1] = clamp(x[k] + dt * f(x[k]), min, max)

The caller evaluates the derivative f(x[k]) at the current state before each
step, so the integrator stays independent of the dynamics it propagates.

Example:
    >>> import numpy as np
    >>> from flightcore.dynamics import DiscreteTimeIntegrator
    >>>
    >>> A = np.array([[0.0, 1.0], [-2.0, -3.0]])
    >>> b = np.array([0.0, -9.81])
    >>> integrator = DiscreteTimeIntegrator(np.zeros(2), 100.0, -100.0)
    >>> x = integrator.state
    >>> for _ in range(200):
    ...     x = integrator.integrate_one_step(0.005, A @ x + b)
"""

import logging
from collections.abc import Callable

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from flightcore import config

logger = logging.getLogger(__name__)


# =============================================================================
# Core Numba Functions
# =============================================================================


@njit(cache=True, fastmath=True)
def _saturated_euler_step(
    state: NDArray[np.float64],
    derivative: NDArray[np.float64],
    dt: float,
    lo: float,
    hi: float,
) -> None:
    """Advance state in place by one clamped Euler step."""
    for i in range(state.shape[0]):
        x = state[i] + dt * derivative[i]
        if x < lo:
            x = lo
        elif x > hi:
            x = hi
        state[i] = x


# =============================================================================
# Integrator
# =============================================================================


@beartype
class DiscreteTimeIntegrator:
    """Fixed-dimension forward Euler integrator with output saturation.

    Not reentrant: a single control loop owns each instance.

    Attributes:
        max_bound: Upper saturation limit applied to every component
        min_bound: Lower saturation limit applied to every component
    """

    def __init__(
        self,
        initial_state: NDArray[np.float64],
        max_bound: float = config.INTEGRATOR_MAX_BOUND,
        min_bound: float = config.INTEGRATOR_MIN_BOUND,
    ) -> None:
        """Initialize integrator.

        Args:
            initial_state: Initial state vector, shape (N,)
            max_bound: Upper saturation limit (default +100)
            min_bound: Lower saturation limit (default -100)

        Raises:
            ValueError: If min_bound > max_bound, or the initial state is not
                a finite 1-D vector inside the bounds
        """
        if not (np.isfinite(max_bound) and np.isfinite(min_bound)):
            raise ValueError(f"Bounds must be finite, got ({min_bound}, {max_bound})")
        if min_bound > max_bound:
            raise ValueError(
                f"min_bound ({min_bound}) must not exceed max_bound ({max_bound}); "
                "the constructor takes (initial_state, max_bound, min_bound)"
            )
        self.max_bound = float(max_bound)
        self.min_bound = float(min_bound)
        self._state = self._validated_state(initial_state)

    def _validated_state(self, state: NDArray[np.float64]) -> NDArray[np.float64]:
        state = np.array(state, dtype=np.float64)
        if state.ndim != 1 or state.size == 0:
            raise ValueError(f"State must be a non-empty 1-D vector, got shape {state.shape}")
        if not np.all(np.isfinite(state)):
            raise ValueError(f"State must be finite, got {state}")
        if np.any(state < self.min_bound) or np.any(state > self.max_bound):
            raise ValueError(
                f"State {state} lies outside bounds [{self.min_bound}, {self.max_bound}]"
            )
        return state

    @property
    def state(self) -> NDArray[np.float64]:
        """Copy of the current state."""
        return self._state.copy()

    @property
    def dimension(self) -> int:
        """State dimension N."""
        return int(self._state.shape[0])

    @property
    def bounds(self) -> tuple[float, float]:
        """Saturation limits as (min, max)."""
        return (self.min_bound, self.max_bound)

    def reset(self, state: NDArray[np.float64]) -> None:
        """Replace the current state.

        Raises:
            ValueError: If the state has the wrong dimension or is invalid
        """
        new_state = self._validated_state(state)
        if new_state.shape != self._state.shape:
            raise ValueError(
                f"State must be shape {self._state.shape}, got {new_state.shape}"
            )
        logger.debug("Integrator reset to %s", new_state)
        self._state = new_state

    def integrate_one_step(
        self,
        dt: float,
        derivative: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Advance the state by one saturated Euler step.

        Args:
            dt: Time step [s], must be positive
            derivative: State derivative evaluated at the current state, shape (N,)

        Returns:
            New state (a copy; the integrator keeps its own buffer)

        Raises:
            ValueError: If dt is not positive and finite, or the derivative
                has the wrong shape or non-finite components
        """
        if not (np.isfinite(dt) and dt > 0.0):
            raise ValueError(f"Time step must be positive and finite, got {dt}")

        derivative = np.ascontiguousarray(derivative, dtype=np.float64)
        if derivative.shape != self._state.shape:
            raise ValueError(
                f"Derivative must be shape {self._state.shape}, got {derivative.shape}"
            )
        if not np.all(np.isfinite(derivative)):
            raise ValueError(f"Derivative must be finite, got {derivative}")

        _saturated_euler_step(self._state, derivative, float(dt), self.min_bound, self.max_bound)
        return self._state.copy()

    def __repr__(self) -> str:
        return (
            f"DiscreteTimeIntegrator(state={self._state!r}, "
            f"max_bound={self.max_bound}, min_bound={self.min_bound})"
        )


# =============================================================================
# Simulation
# =============================================================================


@beartype
def simulate(
    integrator: DiscreteTimeIntegrator,
    derivative_fn: Callable[[NDArray[np.float64]], NDArray[np.float64]],
    dt: float,
    n_steps: int,
    t0: float = 0.0,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Drive an integrator with a state-dependent derivative function.

    Args:
        integrator: Integrator holding the initial state (advanced in place)
        derivative_fn: Function computing dx/dt from the current state
        dt: Time step [s]
        n_steps: Number of steps to take
        t0: Time of the initial state [s]

    Returns:
        Tuple of (times, states) with shapes (n_steps + 1,) and
        (n_steps + 1, N); row 0 is the initial state
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")

    states = np.empty((n_steps + 1, integrator.dimension))
    states[0] = integrator.state
    x = states[0]

    for k in range(n_steps):
        x = integrator.integrate_one_step(dt, np.asarray(derivative_fn(x), dtype=np.float64))
        states[k + 1] = x

    times = t0 + dt * np.arange(n_steps + 1)
    return times, states
