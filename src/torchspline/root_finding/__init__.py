from ._convergence import check_convergence, default_tolerances
from ._exceptions import BracketError, RootFindingError
from ._newton_bisection import newton_bisection

__all__ = [
    "check_convergence",
    "default_tolerances",
    "newton_bisection",
    "BracketError",
    "RootFindingError",
]
