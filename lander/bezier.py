"""Bézier curve evaluation by De Casteljau reduction.

A curve is defined by an ordered list of control points. For each sample
parameter t the list is repeatedly reduced by linearly interpolating every
adjacent pair at t until a single point remains. With three control points
(start, waypoint, target) this is the quadratic Bézier used by the
trajectory planner; any count >= 2 is accepted so multi-waypoint paths can
reuse the same evaluator.

Samples are taken at t = i / n for i in [0, n), so the final control point
itself is never emitted. No arc-length reparameterization is applied; use
`path_length` for distance along a path.

Example:
    >>> from lander.bezier import evaluate_bezier, path_length
    >>> from lander.geometry import Point
    >>>
    >>> path = evaluate_bezier(
    ...     [Point(6500.0, 2000.0), Point(5350.0, 2200.0), Point(4200.0, 220.0)],
    ...     sample_count=50,
    ... )
    >>> length = path_length(path)  # [m]
"""

from collections.abc import Sequence

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from lander.geometry import Point

DEFAULT_SAMPLE_COUNT: int = 50


# =============================================================================
# Numba-Optimized Core
# =============================================================================


@njit(cache=True)
def _de_casteljau(
    control: NDArray[np.float64],
    sample_count: int,
) -> NDArray[np.float64]:
    """Sample a Bézier curve at t = i / sample_count.

    control has shape (K, 2); returns shape (sample_count, 2).
    """
    k = control.shape[0]
    out = np.empty((sample_count, 2))
    work = np.empty((k, 2))
    for i in range(sample_count):
        t = i / sample_count
        for j in range(k):
            work[j, 0] = control[j, 0]
            work[j, 1] = control[j, 1]
        for level in range(k - 1, 0, -1):
            for j in range(level):
                work[j, 0] = (work[j + 1, 0] - work[j, 0]) * t + work[j, 0]
                work[j, 1] = (work[j + 1, 1] - work[j, 1]) * t + work[j, 1]
        out[i, 0] = work[0, 0]
        out[i, 1] = work[0, 1]
    return out


# =============================================================================
# Public API
# =============================================================================


@beartype
def sample_bezier(
    control: NDArray[np.float64],
    sample_count: int = DEFAULT_SAMPLE_COUNT,
) -> NDArray[np.float64]:
    """Sample a Bézier curve given control points as an array.

    Args:
        control: Control points, shape (K, 2) with K >= 2
        sample_count: Number of evenly spaced samples over t in [0, 1)

    Returns:
        Sampled points, shape (sample_count, 2), in increasing t order
    """
    if control.ndim != 2 or control.shape[1] != 2:
        raise ValueError(f"Control points must be shape (K, 2), got {control.shape}")
    if control.shape[0] < 2:
        raise ValueError("Need at least 2 control points")
    if sample_count < 1:
        raise ValueError(f"sample_count must be positive, got {sample_count}")

    return _de_casteljau(np.ascontiguousarray(control, dtype=np.float64), sample_count)


@beartype
def evaluate_bezier(
    control_points: Sequence[Point],
    sample_count: int = DEFAULT_SAMPLE_COUNT,
) -> list[Point]:
    """Evaluate a Bézier curve into a sampled path.

    Args:
        control_points: Ordered control points (at least 2)
        sample_count: Number of samples; trades collision-check fidelity
            against cost

    Returns:
        Path of exactly `sample_count` points in increasing t order
    """
    control = np.array([[p.x, p.y] for p in control_points], dtype=np.float64)
    if control.shape[0] < 2:
        raise ValueError("Need at least 2 control points")

    samples = sample_bezier(control, sample_count)
    return [Point(float(x), float(y)) for x, y in samples]


@beartype
def path_length(path: Sequence[Point]) -> float:
    """Length of a sampled path [m].

    Sum of Euclidean distances between consecutive samples.
    """
    total = 0.0
    for prev, curr in zip(path, path[1:]):
        total += prev.distance(curr)
    return total
