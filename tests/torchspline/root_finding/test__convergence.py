import torch

from torchspline.root_finding import check_convergence, default_tolerances


class TestDefaultTolerances:
    def test_float64(self):
        tols = default_tolerances(torch.float64)
        assert tols["xtol"] == 1e-12
        assert tols["rtol"] == 1e-9
        assert tols["ftol"] == 1e-12

    def test_float32(self):
        tols = default_tolerances(torch.float32)
        assert tols["xtol"] == 1e-6
        assert tols["rtol"] == 1e-5
        assert tols["ftol"] == 1e-6

    def test_half_precision_uses_float32_row(self):
        for dtype in (torch.float16, torch.bfloat16):
            assert default_tolerances(dtype) == default_tolerances(torch.float32)


class TestCheckConvergence:
    def test_converged_by_xtol(self):
        """Converged when x change is small."""
        x_old = torch.tensor([1.0, 2.0, 3.0], dtype=torch.float64)
        x_new = torch.tensor([1.0 + 1e-14, 2.5, 3.0], dtype=torch.float64)
        f_old = torch.tensor([1.0, 1.0, 1.0], dtype=torch.float64)

        result = check_convergence(x_old, x_new, f_old, 1e-12, 0.0, 1e-12)

        assert result.tolist() == [True, False, True]

    def test_converged_by_rtol(self):
        x_old = torch.tensor([1e6], dtype=torch.float64)
        x_new = torch.tensor([1e6 + 1e-4], dtype=torch.float64)
        f_old = torch.tensor([1.0], dtype=torch.float64)

        assert check_convergence(x_old, x_new, f_old, 0.0, 1e-9, 0.0).all()

    def test_converged_by_ftol(self):
        """Converged when the residual is small, even if x still moves."""
        x_old = torch.tensor([1.0], dtype=torch.float64)
        x_new = torch.tensor([2.0], dtype=torch.float64)
        f_old = torch.tensor([1e-15], dtype=torch.float64)

        assert check_convergence(x_old, x_new, f_old, 1e-12, 1e-9, 1e-12).all()
