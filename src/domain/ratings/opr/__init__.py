"""OPR rating modules."""

from domain.ratings.opr.calculator import (
    GaussSeidelSolution,
    NormalEquations,
    OprParameters,
    build_normal_equations,
    compute_ratings,
    initial_estimate,
    solve_gauss_seidel,
    solve_ratings,
)
from domain.ratings.opr.config import OprSystemConfig, load_opr_system_configs

__all__ = [
    "GaussSeidelSolution",
    "NormalEquations",
    "OprParameters",
    "OprSystemConfig",
    "build_normal_equations",
    "compute_ratings",
    "initial_estimate",
    "load_opr_system_configs",
    "solve_gauss_seidel",
    "solve_ratings",
]
