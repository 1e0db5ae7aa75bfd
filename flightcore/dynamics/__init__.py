"""Dynamics module: rotation utilities and discrete-time state propagation.

Example:
    >>> import numpy as np
    >>> from flightcore.dynamics import DiscreteTimeIntegrator, simulate
    >>>
    >>> integrator = DiscreteTimeIntegrator(np.zeros(2), 100.0, -100.0)
    >>> times, states = simulate(integrator, lambda x: np.array([x[1], -9.81]), 0.01, 100)
"""

from flightcore.dynamics.integrator import (
    DiscreteTimeIntegrator,
    simulate,
)
from flightcore.dynamics.rotation import (
    canonicalize_quaternion,
    dcm_to_euler,
    dcm_to_quaternion,
    normalize_quaternion,
    quaternion_to_dcm,
)

__all__ = [
    # Integration
    "DiscreteTimeIntegrator",
    "simulate",
    # Rotation utilities
    "quaternion_to_dcm",
    "dcm_to_quaternion",
    "dcm_to_euler",
    "normalize_quaternion",
    "canonicalize_quaternion",
]
