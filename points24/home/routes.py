# points24/home/routes.py
import logging

from flask import Blueprint, current_app, render_template, request

from points24.api.routes import validate_numbers
from points24.solver import SolverError, get_solver, parse_numbers, solve

logger = logging.getLogger(__name__)
bp = Blueprint("home", __name__)

EXAMPLES = ["4 4 10 10", "1 5 5 5", "3 3 8 8", "1 2 3 4 5"]


@bp.get("/")
def index():
    cfg = current_app.config
    text = (request.args.get("numbers") or "").strip()
    try:
        limit = int(request.args.get("limit") or cfg["DEFAULT_LIMIT"])
    except ValueError:
        limit = cfg["DEFAULT_LIMIT"]
    limit = max(1, min(limit, cfg["MAX_LIMIT"]))

    ctx = {"numbers": text, "limit": limit, "examples": EXAMPLES,
           "result": None, "error": None, "katex_cdn": cfg["KATEX_CDN"]}
    if not text:
        return render_template("home/index.html", **ctx)

    numbers = validate_numbers(parse_numbers(text), min_count=2)
    if numbers is None:
        bound = cfg["MAX_ABS_NUMBER"]
        ctx["error"] = f"Enter 2 to {cfg['MAX_NUMBERS']} integers between -{bound} and {bound}."
        return render_template("home/index.html", **ctx), 400

    try:
        ctx["result"] = solve(numbers, limit, solver=get_solver(),
                              target=cfg["SOLVE_TARGET"],
                              all_args=cfg.get("RENDER_ALL_CALL_ARGS", False))
    except SolverError as e:
        logger.warning("Solver failed for %s: %s", numbers, e)
        ctx["error"] = f"Solver error: {e}"
    return render_template("home/index.html", **ctx)
