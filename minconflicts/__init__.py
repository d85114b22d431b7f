"""Min-conflicts local search with an N-Queens board model."""

from .board import UNASSIGNED, Constraint, NQueens
from .constraints import (
    NoSolutionError,
    angle_constraint,
    attack_constraint,
    build_constraints,
    collinear_constraint,
)
from .geometry import gcd, irreducible_slopes
from .search import Conflict, MinConflict, step
from .solver import SolveResult, default_max_iter, solve
from .utils import attack_pairs, is_valid_solution

__all__ = [
    "UNASSIGNED",
    "Constraint",
    "NQueens",
    "NoSolutionError",
    "attack_constraint",
    "collinear_constraint",
    "angle_constraint",
    "build_constraints",
    "gcd",
    "irreducible_slopes",
    "Conflict",
    "MinConflict",
    "step",
    "SolveResult",
    "default_max_iter",
    "solve",
    "attack_pairs",
    "is_valid_solution",
]
