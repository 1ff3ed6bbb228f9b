"""Control algorithms for the lander.

Control turns a desired direction of travel from guidance into a
rate-limited (angle, power) command.

Available controllers:
    CommandSelector: Short-horizon rollout over a discrete command grid
"""

from flight.control.command_selector import (
    DEFAULT_ANGLE_OFFSETS,
    DEFAULT_POWERS,
    CommandSelector,
    Selection,
    SelectorConfig,
)

__all__ = [
    "DEFAULT_ANGLE_OFFSETS",
    "DEFAULT_POWERS",
    "CommandSelector",
    "Selection",
    "SelectorConfig",
]
