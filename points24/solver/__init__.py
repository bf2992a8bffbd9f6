# points24/solver/__init__.py
from .output import Solution, extract_solutions, parse_numbers, strip_prompt
from .runner import (
    ProcessSolver,
    SolveResult,
    SolverError,
    SolverNotFound,
    SolverOutput,
    SolverTimeout,
    solve,
)
from .registry import get_solver

__all__ = [
    "Solution", "extract_solutions", "parse_numbers", "strip_prompt",
    "ProcessSolver", "SolveResult", "SolverOutput", "solve",
    "SolverError", "SolverNotFound", "SolverTimeout", "get_solver",
]
