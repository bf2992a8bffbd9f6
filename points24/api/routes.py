# points24/api/routes.py
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request

from points24.expr import try_infix_to_latex
from points24.extensions import limiter
from points24.models import recent_runs, record_run
from points24.solver import SolverError, get_solver, solve

logger = logging.getLogger(__name__)
bp = Blueprint("api", __name__, url_prefix="/api")


# -----------------------------------------------------------------------------
# Request validation
# -----------------------------------------------------------------------------
def _is_safe_number(value: Any, max_abs: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) <= max_abs


def validate_numbers(raw: Any, min_count: int = 1) -> Optional[List[int]]:
    """The hand as a list, or None if it breaks the MAX_NUMBERS / MAX_ABS_NUMBER bounds."""
    cfg = current_app.config
    numbers = raw if isinstance(raw, list) else []
    if not (max(min_count, 1) <= len(numbers) <= cfg["MAX_NUMBERS"]):
        return None
    if not all(_is_safe_number(n, cfg["MAX_ABS_NUMBER"]) for n in numbers):
        return None
    return numbers


def _resolve_limit(raw: Any) -> int:
    cfg = current_app.config
    if isinstance(raw, int) and not isinstance(raw, bool) and raw > 0:
        return min(raw, cfg["MAX_LIMIT"])
    return cfg["DEFAULT_LIMIT"]


def _json_body() -> Tuple[Optional[dict], Optional[Tuple[Any, int]]]:
    data = request.get_json(silent=True)
    if data is None and request.get_data():
        return None, (jsonify({"error": "Invalid JSON"}), 400)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return None, (jsonify({"error": "Invalid JSON"}), 400)
    return data, None


def _record(numbers, limit, **kw) -> None:
    if current_app.config.get("RECORD_RUNS", True):
        record_run(numbers, limit, **kw)


# -----------------------------------------------------------------------------
# API: Solve
# -----------------------------------------------------------------------------
@bp.post("/solve")
@limiter.limit(lambda: current_app.config.get("SOLVE_RATE_LIMIT", "30 per minute"))
def api_solve():
    data, err = _json_body()
    if err:
        return err

    numbers = validate_numbers(data.get("numbers"))
    if numbers is None:
        logger.info("Rejected numbers: %r", data.get("numbers"))
        return jsonify({"error": "Invalid numbers"}), 400
    limit = _resolve_limit(data.get("limit"))

    cfg = current_app.config
    try:
        result = solve(
            numbers,
            limit,
            solver=get_solver(),
            target=cfg["SOLVE_TARGET"],
            all_args=cfg.get("RENDER_ALL_CALL_ARGS", False),
        )
    except SolverError as e:
        logger.warning("Solver failed for %s: %s", numbers, e)
        _record(numbers, limit, error=str(e))
        return jsonify({"error": str(e) or "solver error"}), 500

    _record(numbers, limit, count=result.count, took_ms=result.took_ms)
    return jsonify(result.to_payload()), 200


# -----------------------------------------------------------------------------
# API: LaTeX for a single infix line
# -----------------------------------------------------------------------------
@bp.post("/latex")
def api_latex():
    data, err = _json_body()
    if err:
        return err
    expr = data.get("expr")
    if not isinstance(expr, str):
        return jsonify({"error": "Missing expr"}), 400

    latex, ok = try_infix_to_latex(
        expr, all_args=current_app.config.get("RENDER_ALL_CALL_ARGS", False)
    )
    return jsonify({"infix": expr, "latex": latex, "ok": ok}), 200


# -----------------------------------------------------------------------------
# API: History
# -----------------------------------------------------------------------------
@bp.get("/history")
def api_history():
    try:
        n = int(request.args.get("n") or 20)
    except ValueError:
        return jsonify({"error": "n must be an integer"}), 400
    n = max(1, min(n, 200))
    runs = recent_runs(n)
    return jsonify({"runs": [r.to_dict() for r in runs], "count": len(runs)}), 200
