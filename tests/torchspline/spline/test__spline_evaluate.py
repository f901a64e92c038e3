"""Tests for the evaluation contract shared by every spline variant."""

import pytest
import torch

from torchspline.quadrature import fixed_quad
from torchspline.spline import (
    SplineDerivatives,
    cubic_hermite_spline_fit,
    generic_b_spline_fit,
    natural_spline_fit,
    quintic_hermite_spline_fit,
    spline_breakpoints,
    spline_curvature,
    spline_derivative,
    spline_max_t,
    spline_position,
    spline_segment_count,
    spline_segment_for_t,
    spline_speed,
    spline_t,
    spline_tangent,
    spline_wiggle,
    uniform_cr_spline_fit,
    uniform_cubic_b_spline_fit,
)
from torchspline.spline._piecewise import polynomial_derivative

POINTS = torch.tensor(
    [
        [-4.0, -1.0],
        [0.0, 1.0],
        [1.0, 3.0],
        [6.0, -4.0],
        [5.0, 0.0],
        [2.0, 2.0],
        [-1.0, 5.0],
        [3.0, 7.0],
    ],
    dtype=torch.float64,
)

SCALAR_POINTS = torch.tensor(
    [0.0, 1.0, 4.0, 9.0, 16.0, 25.0, 36.0, 49.0], dtype=torch.float64
)

# (builder, continuity order)
VARIANTS = {
    "uniform_cubic_b": (lambda p: uniform_cubic_b_spline_fit(p), 2),
    "uniform_cubic_b_looping": (
        lambda p: uniform_cubic_b_spline_fit(p, looping=True),
        2,
    ),
    "generic_b_3": (lambda p: generic_b_spline_fit(p, degree=3), 2),
    "generic_b_5": (lambda p: generic_b_spline_fit(p, degree=5), 4),
    "natural": (lambda p: natural_spline_fit(p), 2),
    "natural_alpha": (lambda p: natural_spline_fit(p, alpha=0.5), 2),
    "natural_looping": (lambda p: natural_spline_fit(p, looping=True), 2),
    "cubic_hermite": (lambda p: cubic_hermite_spline_fit(p), 1),
    "cubic_hermite_alpha": (lambda p: cubic_hermite_spline_fit(p, alpha=0.5), 1),
    "cubic_hermite_looping": (
        lambda p: cubic_hermite_spline_fit(p, alpha=0.5, looping=True),
        1,
    ),
    "quintic_hermite": (lambda p: quintic_hermite_spline_fit(p), 2),
    "quintic_hermite_alpha": (
        lambda p: quintic_hermite_spline_fit(p, alpha=0.5),
        2,
    ),
    "uniform_cr": (lambda p: uniform_cr_spline_fit(p), 1),
    "uniform_cr_looping": (lambda p: uniform_cr_spline_fit(p, looping=True), 1),
}


@pytest.fixture(params=sorted(VARIANTS))
def variant(request):
    builder, continuity = VARIANTS[request.param]
    return builder(POINTS), continuity


class TestSplineKnots:
    def test_breakpoints(self, variant):
        spline, _ = variant
        breakpoints = spline_breakpoints(spline)

        assert breakpoints.shape == (spline_segment_count(spline) + 1,)
        assert float(breakpoints[0]) == 0.0
        assert torch.all(breakpoints[1:] > breakpoints[:-1])
        torch.testing.assert_close(breakpoints[-1], spline_max_t(spline))

    def test_t_lookup(self, variant):
        spline, _ = variant

        for i in range(spline.knots.shape[0]):
            torch.testing.assert_close(spline_t(spline, i), spline.knots[i])

    def test_t_index_out_of_range(self, variant):
        spline, _ = variant

        with pytest.raises(IndexError):
            spline_t(spline, spline.knots.shape[0])

        with pytest.raises(IndexError):
            spline_t(spline, -1)

    def test_segment_for_t(self, variant):
        spline, _ = variant
        breakpoints = spline_breakpoints(spline)
        n_segments = spline_segment_count(spline)

        # Breakpoints start their own segment, except max_t
        index = spline_segment_for_t(spline, breakpoints)
        expected = torch.arange(n_segments + 1).clamp(max=n_segments - 1)
        assert torch.equal(index, expected)

        midpoints = (breakpoints[1:] + breakpoints[:-1]) / 2
        assert torch.equal(
            spline_segment_for_t(spline, midpoints), torch.arange(n_segments)
        )

    def test_segment_for_t_outside_domain(self, variant):
        spline, _ = variant
        max_t = float(spline_max_t(spline))

        index = spline_segment_for_t(spline, torch.tensor([-3.0, max_t + 3.0]))

        assert index.tolist() == [0, spline_segment_count(spline) - 1]


class TestSplineEvaluate:
    def test_output_shape(self, variant):
        spline, _ = variant
        t = torch.rand(3, 4, dtype=torch.float64) * spline_max_t(spline)

        assert spline_position(spline, t).shape == (3, 4, 2)
        assert spline_position(spline, 0.5).shape == (2,)

    def test_clamps_outside_domain(self, variant):
        spline, _ = variant
        max_t = spline_max_t(spline)

        torch.testing.assert_close(
            spline_position(spline, -1.5), spline_position(spline, 0.0)
        )
        torch.testing.assert_close(
            spline_position(spline, max_t + 2.0),
            spline_position(spline, max_t),
        )

        before = spline_wiggle(spline, -0.5)
        start = spline_wiggle(spline, 0.0)
        for actual, expected in zip(before, start):
            torch.testing.assert_close(actual, expected)

    def test_derivative_tuples(self, variant):
        spline, _ = variant
        t = torch.linspace(0, float(spline_max_t(spline)), 9, dtype=torch.float64)

        tangent = spline_tangent(spline, t)
        curvature = spline_curvature(spline, t)
        wiggle = spline_wiggle(spline, t)

        assert isinstance(tangent, SplineDerivatives)
        assert tangent.curvature is None and tangent.wiggle is None
        assert curvature.wiggle is None

        for order, value in enumerate(wiggle):
            torch.testing.assert_close(
                value, spline_derivative(spline, t, order=order)
            )
        torch.testing.assert_close(tangent.position, wiggle.position)
        torch.testing.assert_close(curvature.curvature, wiggle.curvature)

    def test_derivative_above_degree_is_zero(self, variant):
        spline, _ = variant
        degree = spline.coefficients.shape[1] - 1

        result = spline_derivative(spline, torch.tensor([0.3, 1.2]), order=degree + 1)

        torch.testing.assert_close(result, torch.zeros(2, 2, dtype=torch.float64))

    def test_negative_order(self, variant):
        spline, _ = variant

        with pytest.raises(ValueError):
            spline_derivative(spline, 0.5, order=-1)

    def test_continuity_at_breakpoints(self, variant):
        """Derivatives up to the variant's continuity order match across joins."""
        spline, continuity = variant
        breakpoints = spline_breakpoints(spline)
        widths = breakpoints[1:] - breakpoints[:-1]

        left = torch.arange(spline_segment_count(spline) - 1)
        right = left + 1

        for order in range(continuity + 1):
            end_of_left = polynomial_derivative(
                spline.coefficients, left, widths[left], order=order
            )
            start_of_right = polynomial_derivative(
                spline.coefficients, right, torch.zeros_like(widths[right]), order=order
            )
            torch.testing.assert_close(end_of_left, start_of_right)

    @pytest.mark.parametrize("name", sorted(VARIANTS))
    def test_gradient_through_points(self, name):
        builder, _ = VARIANTS[name]

        points = POINTS.clone().requires_grad_(True)
        spline = builder(points)

        spline_position(spline, torch.tensor([0.25, 1.75])).sum().backward()

        assert points.grad is not None
        assert torch.all(torch.isfinite(points.grad))


class TestScalarCurve:
    """Curves of dimension 1 evaluate to plain scalars."""

    @pytest.mark.parametrize("name", sorted(VARIANTS))
    def test_float_and_zero_dim_queries(self, name):
        builder, _ = VARIANTS[name]
        spline = builder(SCALAR_POINTS)
        t = 0.4 * float(spline_max_t(spline))
        batched = torch.tensor([t], dtype=torch.float64)

        position = spline_position(spline, t)
        tangent = spline_tangent(spline, torch.tensor(t, dtype=torch.float64))

        assert position.shape == ()
        assert tangent.position.shape == () and tangent.tangent.shape == ()
        torch.testing.assert_close(position, spline_position(spline, batched)[0])
        torch.testing.assert_close(
            tangent.tangent, spline_derivative(spline, batched, order=1)[0]
        )
        torch.testing.assert_close(
            spline_speed(spline, t), tangent.tangent.abs()
        )


class TestDerivativeConsistency:
    """Integrating a derivative recovers the change in the next lower one."""

    @staticmethod
    def _integral(spline, order, a, b):
        return fixed_quad(
            lambda x: spline_derivative(spline, x, order=order), a, b
        )

    def _segment_integral(self, spline, order, first, last):
        breakpoints = spline_breakpoints(spline)
        return sum(
            self._integral(spline, order, breakpoints[j], breakpoints[j + 1])
            for j in range(first, last)
        )

    def test_tangent_and_curvature_over_two_segments(self, variant):
        spline, _ = variant
        breakpoints = spline_breakpoints(spline)

        for j in range(spline_segment_count(spline) - 1):
            a = breakpoints[j]
            b = breakpoints[j + 2]

            for order in (1, 2):
                integrated = self._segment_integral(spline, order, j, j + 2)
                expected = spline_derivative(
                    spline, b, order=order - 1
                ) - spline_derivative(spline, a, order=order - 1)

                torch.testing.assert_close(integrated, expected)

    @pytest.mark.parametrize(
        "name", sorted(name for name, (_, order) in VARIANTS.items() if order >= 2)
    )
    def test_wiggle_over_two_segments(self, name):
        builder, _ = VARIANTS[name]
        spline = builder(POINTS)

        breakpoints = spline_breakpoints(spline)

        for j in range(spline_segment_count(spline) - 1):
            integrated = self._segment_integral(spline, 3, j, j + 2)
            expected = spline_derivative(
                spline, breakpoints[j + 2], order=2
            ) - spline_derivative(spline, breakpoints[j], order=2)

            torch.testing.assert_close(integrated, expected)

    def test_wiggle_within_segment(self, variant):
        spline, _ = variant
        breakpoints = spline_breakpoints(spline)

        for j in range(spline_segment_count(spline)):
            width = breakpoints[j + 1] - breakpoints[j]
            a = breakpoints[j] + 0.25 * width
            b = breakpoints[j] + 0.75 * width

            integrated = self._integral(spline, 3, a, b)
            expected = spline_derivative(spline, b, order=2) - spline_derivative(
                spline, a, order=2
            )

            torch.testing.assert_close(integrated, expected)
