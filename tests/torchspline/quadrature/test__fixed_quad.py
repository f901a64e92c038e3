import numpy as np
import pytest
import scipy.integrate
import torch

from torchspline.quadrature import fixed_quad


class TestFixedQuad:
    def test_basic_integration(self):
        """Integrate sin(x) from 0 to pi"""
        result = fixed_quad(torch.sin, 0, torch.pi, n=32)

        assert torch.allclose(
            result, torch.tensor(2.0, dtype=result.dtype), rtol=1e-10
        )

    def test_matches_scipy(self):
        """Compare with scipy.integrate.fixed_quad"""
        result = fixed_quad(lambda x: torch.exp(-(x**2)), -1, 1, n=10)
        expected, _ = scipy.integrate.fixed_quad(
            lambda x: np.exp(-(x**2)), -1, 1, n=10
        )

        assert torch.allclose(result, torch.tensor(expected), rtol=1e-10)

    def test_batched_limits(self):
        """Test with batched upper limit"""
        b = torch.linspace(1, 5, 10, dtype=torch.float64)
        result = fixed_quad(lambda x: x**2, 0, b, n=32)

        assert result.shape == (10,)
        expected = b**3 / 3
        assert torch.allclose(result, expected, rtol=1e-6)

    def test_batched_both_limits(self):
        a = torch.tensor([[0.0], [1.0]], dtype=torch.float64)
        b = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)

        result = fixed_quad(lambda x: 2 * x, a, b)

        assert result.shape == (2, 3)
        torch.testing.assert_close(result, b**2 - a**2)

    def test_polynomial_exact(self):
        """Fixed quad should be exact for polynomials of degree <= 2n-1"""
        # n=5 => exact for degree <= 9
        result = fixed_quad(lambda x: x**8, 0, 1, n=5)

        assert torch.allclose(
            result, torch.tensor(1 / 9, dtype=result.dtype), rtol=1e-10
        )

    def test_vector_valued(self):
        result = fixed_quad(
            lambda x: torch.stack([x, x**2], dim=-1), 0.0, 1.0
        )

        assert result.shape == (2,)
        torch.testing.assert_close(
            result, torch.tensor([0.5, 1 / 3], dtype=torch.float64)
        )

    def test_vector_valued_batched(self):
        b = torch.tensor([1.0, 2.0], dtype=torch.float64)

        result = fixed_quad(
            lambda x: torch.stack([torch.ones_like(x), 3 * x**2], dim=-1),
            0.0,
            b,
        )

        assert result.shape == (2, 2)
        torch.testing.assert_close(result, torch.stack([b, b**3], dim=-1))

    def test_swapped_limits_flip_sign(self):
        forward = fixed_quad(torch.exp, 0.0, 2.0)
        backward = fixed_quad(torch.exp, 2.0, 0.0)

        torch.testing.assert_close(backward, -forward)

    def test_float32(self):
        a = torch.tensor(0.0, dtype=torch.float32)
        result = fixed_quad(lambda x: x**3, a, 2.0)

        assert result.dtype == torch.float32
        torch.testing.assert_close(result, torch.tensor(4.0))


class TestFixedQuadGradients:
    def test_gradient_closure_param(self):
        """Gradient flows through closure parameters"""
        theta = torch.tensor(2.0, requires_grad=True, dtype=torch.float64)

        # integral of theta * x^2 dx from 0 to 1 = theta / 3
        result = fixed_quad(lambda x: theta * x**2, 0, 1, n=32)
        result.backward()

        assert theta.grad is not None
        assert torch.allclose(
            theta.grad, torch.tensor(1 / 3, dtype=torch.float64), rtol=1e-6
        )

    def test_gradient_upper_limit(self):
        """Gradient flows through upper limit via Leibniz rule"""
        b = torch.tensor(torch.pi, requires_grad=True, dtype=torch.float64)

        # d/db integral_0^b sin(x) dx = sin(b) = sin(pi) approximately 0
        result = fixed_quad(torch.sin, 0, b, n=32)
        result.backward()

        assert b.grad is not None
        assert torch.allclose(b.grad, torch.sin(b).detach(), atol=1e-6)

    def test_gradient_lower_limit(self):
        a = torch.tensor(0.5, requires_grad=True, dtype=torch.float64)

        result = fixed_quad(lambda x: x**2, a, 2.0)
        result.backward()

        torch.testing.assert_close(
            a.grad, torch.tensor(-0.25, dtype=torch.float64)
        )

    def test_gradient_batched_limits(self):
        b = torch.tensor([1.0, 2.0, 3.0], requires_grad=True, dtype=torch.float64)

        result = fixed_quad(torch.cos, 0.0, b)
        result.sum().backward()

        torch.testing.assert_close(b.grad, torch.cos(b.detach()))

    def test_gradient_vector_valued(self):
        b = torch.tensor(2.0, requires_grad=True, dtype=torch.float64)

        result = fixed_quad(lambda x: torch.stack([x, x**2], dim=-1), 0.0, b)
        result.sum().backward()

        # d/db (b^2/2 + b^3/3) = b + b^2
        torch.testing.assert_close(
            b.grad, torch.tensor(6.0, dtype=torch.float64)
        )

    def test_gradient_closure_and_limit(self):
        theta = torch.tensor(3.0, requires_grad=True, dtype=torch.float64)
        b = torch.tensor(2.0, requires_grad=True, dtype=torch.float64)

        # integral_0^b theta * x^2 dx = theta * b^3 / 3
        result = fixed_quad(lambda x: theta * x**2, 0.0, b)
        result.backward()

        torch.testing.assert_close(
            theta.grad, torch.tensor(8 / 3, dtype=torch.float64)
        )
        torch.testing.assert_close(
            b.grad, torch.tensor(12.0, dtype=torch.float64)
        )

    def test_gradcheck_limits(self):
        a = torch.tensor(0.3, requires_grad=True, dtype=torch.float64)
        b = torch.tensor(1.7, requires_grad=True, dtype=torch.float64)

        assert torch.autograd.gradcheck(
            lambda a, b: fixed_quad(lambda x: x**3 - x, a, b), (a, b)
        )
