# points24/solver/registry.py
from __future__ import annotations
from pathlib import Path
from typing import Callable, TypeVar

from flask import current_app

from .runner import ProcessSolver, SolverFn

T = TypeVar("T")

SOLVER_KEY = "points24_solver"


def get_extension(key: str, factory: Callable[[], T]) -> T:
    ext = getattr(current_app, "extensions", None)
    if ext is None:
        current_app.extensions = {}
        ext = current_app.extensions
    obj: T | None = ext.get(key)
    if obj is None:
        obj = factory()
        ext[key] = obj
    return obj


def _process_solver_from_config() -> ProcessSolver:
    cfg = current_app.config
    return ProcessSolver(
        executable=Path(cfg["SOLVER_PATH"]),
        timeout=float(cfg.get("SOLVER_TIMEOUT", 10)),
    )


def get_solver() -> SolverFn:
    """Solver for the current app; tests may put their own in app.extensions."""
    return get_extension(SOLVER_KEY, _process_solver_from_config)
