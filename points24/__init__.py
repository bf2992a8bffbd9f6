# points24/__init__.py
from __future__ import annotations
import logging
import os
import secrets
from logging.handlers import RotatingFileHandler
from urllib.parse import urlsplit

import click
from flask import Flask, g, jsonify

from .config import Config
from .db import db
from .extensions import limiter, migrate

logger = logging.getLogger(__name__)


def _configure_logging(app: Flask) -> None:
    if app.debug or app.testing:
        return
    log_dir = app.config.get("LOG_DIR", "logs")
    if not os.path.exists(log_dir):
        os.mkdir(log_dir)

    # File handler - rotates logs when they get too big
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "points24.log"), maxBytes=10240, backupCount=10
    )
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
    ))
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    logging.getLogger("points24").addHandler(file_handler)

    app.logger.setLevel(logging.INFO)
    app.logger.info("points24 startup")


def _register_cli(app: Flask) -> None:
    from .models import recent_runs, record_run
    from .solver import SolverError, get_solver, solve
    from .expr import try_infix_to_latex

    @app.cli.command("solve")
    @click.argument("numbers", nargs=-1, type=int, required=True)
    @click.option("--limit", default=None, type=int, help="Maximum solutions to print.")
    def solve_command(numbers, limit):
        """Solve a hand, e.g. `flask solve 4 4 10 10`."""
        cfg = app.config
        limit = limit if limit and limit > 0 else cfg["DEFAULT_LIMIT"]
        try:
            result = solve(numbers, limit, solver=get_solver(),
                           target=cfg["SOLVE_TARGET"],
                           all_args=cfg.get("RENDER_ALL_CALL_ARGS", False))
        except SolverError as e:
            raise click.ClickException(str(e)) from e
        if cfg.get("RECORD_RUNS", True):
            record_run(numbers, limit, count=result.count, took_ms=result.took_ms)
        if not result.count:
            click.echo("no solution")
        for s in result.solutions:
            click.echo(f"{s.infix}\t{s.latex}")

    @app.cli.command("latex")
    @click.argument("expr")
    def latex_command(expr):
        """Print the LaTeX markup for one infix expression."""
        latex, ok = try_infix_to_latex(expr, all_args=app.config.get("RENDER_ALL_CALL_ARGS", False))
        if not ok:
            click.echo("warning: could not parse, showing text fallback", err=True)
        click.echo(latex)

    @app.cli.command("history")
    @click.option("-n", default=20, show_default=True, help="Number of runs.")
    def history_command(n):
        """Print the most recent solve runs."""
        for r in recent_runs(n):
            click.echo(f"{r.id}\t{r.values_key}\t{r.status}\t{r.solution_count}\t{r.took_ms}ms")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(413)
    def payload_too_large(e):
        return jsonify({"error": "payload too large"}), 413

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({"error": "Too many requests"}), 429


def _content_security_policy(katex_origin: str, nonce: str) -> str:
    sources = {
        "default-src": "'self'",
        "img-src": "'self' data:",
        "font-src": f"'self' {katex_origin}",
        "style-src": f"'self' 'unsafe-inline' {katex_origin}",
        "script-src": f"'self' 'nonce-{nonce}' {katex_origin}",
    }
    return "; ".join(f"{k} {v.strip()}" for k, v in sources.items())


def _install_security_headers(app: Flask) -> None:
    """Per-request script nonce for the page template plus the response headers."""
    cdn = urlsplit(app.config.get("KATEX_CDN") or "")
    katex_origin = f"{cdn.scheme}://{cdn.netloc}" if cdn.netloc else ""
    headers = {
        "X-Frame-Options": app.config.get("FRAME_OPTIONS", "DENY"),
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": app.config.get("REFERRER_POLICY", "no-referrer"),
    }

    @app.before_request
    def _set_csp_nonce():
        g.csp_nonce = secrets.token_urlsafe(16)

    @app.context_processor
    def _inject_csp_nonce():
        return {"csp_nonce": getattr(g, "csp_nonce", "")}

    @app.after_request
    def _set_security_headers(resp):
        resp.headers.update(headers)
        resp.headers["Content-Security-Policy"] = _content_security_policy(
            katex_origin, getattr(g, "csp_nonce", "")
        )
        return resp


def create_app(config_object=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # ---------------------------
    # Config
    # ---------------------------
    app.config.from_object(config_object or Config)
    if config_object is None:
        app.config.from_pyfile("config.py", silent=True)  # instance/config.py (optional)

    if not app.config.get("SECRET_KEY"):
        app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY") or secrets.token_hex(32)

    _configure_logging(app)

    # ---------------------------
    # Extensions init
    # ---------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # ---------------------------
    # Blueprints
    # ---------------------------
    from .api.routes import bp as api_bp
    from .home.routes import bp as home_bp
    app.register_blueprint(api_bp)
    app.register_blueprint(home_bp)

    _register_error_handlers(app)
    _register_cli(app)

    with app.app_context():
        from . import models  # noqa: F401  (register tables)
        if app.config.get("AUTO_CREATE_TABLES", True):
            db.create_all()

    _install_security_headers(app)

    logger.debug("app created with solver %s", app.config.get("SOLVER_PATH"))
    return app
