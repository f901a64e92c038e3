"""Tests for arbitrary degree B-spline functions."""

import numpy as np
import pytest
import torch

from torchspline.spline import (
    DegreeError,
    GenericBSpline,
    InvalidInputError,
    b_spline_basis,
    generic_b_spline,
    generic_b_spline_fit,
    spline_max_t,
    spline_position,
    spline_segment_count,
    uniform_cubic_b_spline_fit,
)

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


class TestGenericBSplineFit:
    @pytest.mark.parametrize("degree", [1, 2, 3, 4, 5])
    def test_shapes(self, degree):
        spline = generic_b_spline_fit(POINTS, degree=degree)
        n = POINTS.shape[0]

        assert isinstance(spline, GenericBSpline)
        assert spline.degree == degree
        assert spline.knot_vector.shape == (n + degree + 1,)
        assert spline.coefficients.shape == (n - degree, degree + 1, 2)
        assert spline_segment_count(spline) == n - degree
        assert float(spline_max_t(spline)) == n - degree

    def test_degree_one_is_polyline(self):
        spline = generic_b_spline_fit(POINTS, degree=1)

        t = torch.arange(8, dtype=torch.float64)
        torch.testing.assert_close(spline_position(spline, t), POINTS)

        midpoints = spline_position(spline, t[:-1] + 0.5)
        torch.testing.assert_close(midpoints, (POINTS[:-1] + POINTS[1:]) / 2)

    def test_cubic_matches_uniform_cubic_b_spline(self):
        generic = generic_b_spline_fit(POINTS, degree=3)
        uniform = uniform_cubic_b_spline_fit(POINTS)

        t = torch.linspace(0, 5, 21, dtype=torch.float64)

        torch.testing.assert_close(
            spline_position(generic, t), spline_position(uniform, t)
        )
        torch.testing.assert_close(generic.knots, uniform.knots)

    @pytest.mark.parametrize("degree", [1, 2, 3, 4, 5])
    def test_scipy_comparison(self, degree):
        """Test that results match scipy.interpolate.BSpline."""
        pytest.importorskip("scipy")
        from scipy.interpolate import BSpline as ScipyBSpline

        spline = generic_b_spline_fit(POINTS, degree=degree)
        n = POINTS.shape[0]

        scipy_spline = ScipyBSpline(
            spline.knot_vector.numpy(), POINTS.numpy(), degree
        )

        t = np.linspace(0, n - degree, 25)
        expected = torch.from_numpy(scipy_spline(t))

        torch.testing.assert_close(
            spline_position(spline, torch.from_numpy(t)),
            expected,
            atol=1e-10,
            rtol=1e-10,
        )


class TestGenericBSplineErrors:
    @pytest.mark.parametrize("degree", [0, -2])
    def test_degree_too_small(self, degree):
        with pytest.raises(DegreeError):
            generic_b_spline_fit(POINTS, degree=degree)

    def test_non_integer_degree(self):
        with pytest.raises(DegreeError):
            generic_b_spline_fit(POINTS, degree=2.5)

    def test_degree_error_is_invalid_input(self):
        assert issubclass(DegreeError, InvalidInputError)

    def test_too_few_points(self):
        with pytest.raises(InvalidInputError):
            generic_b_spline_fit(POINTS[:5], degree=5)


class TestBSplineBasis:
    def test_partition_of_unity(self):
        knots = torch.arange(10, dtype=torch.float64)
        t = torch.linspace(3, 6, 13, dtype=torch.float64)

        basis = b_spline_basis(t, knots, 3)

        assert basis.shape == (13, 6)
        torch.testing.assert_close(
            basis.sum(dim=-1), torch.ones(13, dtype=torch.float64)
        )

    def test_non_decreasing_knots(self):
        with pytest.raises(InvalidInputError):
            b_spline_basis(
                torch.tensor([0.5]), torch.tensor([0.0, 2.0, 1.0, 3.0]), 1
            )


class TestGenericBSplineConvenience:
    def test_callable(self):
        curve = generic_b_spline(POINTS, degree=4)
        spline = generic_b_spline_fit(POINTS, degree=4)

        t = torch.linspace(0, 4, 9, dtype=torch.float64)

        torch.testing.assert_close(curve(t), spline_position(spline, t))
