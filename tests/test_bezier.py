"""Unit tests for the Bézier evaluator."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from lander.bezier import (
    DEFAULT_SAMPLE_COUNT,
    evaluate_bezier,
    path_length,
    sample_bezier,
)
from lander.geometry import Point


class TestEvaluateBezier:
    """Test De Casteljau sampling over t in [0, 1)."""

    def test_sample_count(self):
        """Path has exactly the requested number of samples."""
        control = [Point(0.0, 0.0), Point(50.0, 100.0), Point(100.0, 0.0)]
        assert len(evaluate_bezier(control)) == DEFAULT_SAMPLE_COUNT
        assert len(evaluate_bezier(control, sample_count=7)) == 7

    def test_first_sample_is_start(self):
        """t = 0 reproduces the first control point exactly."""
        control = [Point(10.0, 20.0), Point(500.0, 900.0), Point(1000.0, 0.0)]
        assert evaluate_bezier(control)[0] == Point(10.0, 20.0)

    def test_end_point_not_sampled(self):
        """t stays below 1, so the last sample stops short of the end."""
        control = [Point(0.0, 0.0), Point(100.0, 0.0)]
        path = evaluate_bezier(control, sample_count=50)
        assert path[-1].x == pytest.approx(98.0)

    def test_two_points_is_linear(self):
        """Two control points give evenly spaced linear interpolation."""
        a = Point(100.0, 2000.0)
        b = Point(600.0, 1000.0)
        path = evaluate_bezier([a, b], sample_count=50)
        for i, p in enumerate(path):
            t = i / 50
            assert p.x == pytest.approx(a.x + (b.x - a.x) * t)
            assert p.y == pytest.approx(a.y + (b.y - a.y) * t)

    def test_identical_control_points(self):
        """A curve with all control points equal collapses to that point."""
        a = Point(1234.5, 678.9)
        path = evaluate_bezier([a, a, a, a])
        assert all(p == a for p in path)

    def test_quadratic_midpoint(self):
        """B(0.5) = 0.25 P0 + 0.5 P1 + 0.25 P2."""
        control = [Point(0.0, 0.0), Point(100.0, 200.0), Point(200.0, 0.0)]
        path = evaluate_bezier(control, sample_count=2)
        assert path[1].x == pytest.approx(100.0)
        assert path[1].y == pytest.approx(100.0)

    def test_cubic_matches_bernstein_form(self):
        """De Casteljau agrees with the Bernstein polynomial."""
        control = np.array([[0.0, 0.0], [100.0, 300.0], [400.0, 300.0], [500.0, 0.0]])
        samples = sample_bezier(control, sample_count=20)

        t = np.arange(20) / 20
        basis = np.stack([(1 - t) ** 3, 3 * t * (1 - t) ** 2, 3 * t**2 * (1 - t), t**3], axis=1)
        assert_allclose(samples, basis @ control, atol=1e-9)

    def test_too_few_control_points(self):
        with pytest.raises(ValueError):
            evaluate_bezier([Point(0.0, 0.0)])

    def test_invalid_sample_count(self):
        with pytest.raises(ValueError):
            evaluate_bezier([Point(0.0, 0.0), Point(1.0, 1.0)], sample_count=0)

    def test_bad_array_shape(self):
        with pytest.raises(ValueError):
            sample_bezier(np.zeros((3, 3)))


class TestPathLength:
    """Test sampled path length."""

    def test_straight_line(self):
        """Samples of a line span (n-1)/n of its length."""
        path = evaluate_bezier([Point(0.0, 0.0), Point(300.0, 400.0)], sample_count=50)
        assert path_length(path) == pytest.approx(500.0 * 49 / 50)

    def test_short_paths(self):
        assert path_length([]) == 0.0
        assert path_length([Point(1.0, 1.0)]) == 0.0
