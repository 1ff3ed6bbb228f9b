"""Dynamics module for point-mass lander simulation.

This module provides the vehicle state, the rate-limited control command
and the translational equations of motion.

Example:
    >>> from lander.dynamics import Command, VehicleState, integrate
    >>>
    >>> state = VehicleState.initial()
    >>> Command(target_angle=15.0, target_power=4).apply(state)
    >>> integrate(state, dt=0.1)
"""

from lander.dynamics.point_mass import (
    GRAVITY,
    MARS_GRAVITY,
    acceleration,
    integrate,
    propagate,
    thrust_acceleration,
)
from lander.dynamics.state import (
    MAX_ANGLE_DEG,
    MAX_ANGLE_STEP_DEG,
    MAX_POWER,
    MAX_POWER_STEP,
    MIN_ANGLE_DEG,
    MIN_POWER,
    Command,
    VehicleState,
)

__all__ = [
    # State
    "VehicleState",
    "Command",
    # Envelope
    "MIN_ANGLE_DEG",
    "MAX_ANGLE_DEG",
    "MAX_ANGLE_STEP_DEG",
    "MIN_POWER",
    "MAX_POWER",
    "MAX_POWER_STEP",
    # Point-mass dynamics
    "GRAVITY",
    "MARS_GRAVITY",
    "acceleration",
    "thrust_acceleration",
    "integrate",
    "propagate",
]
