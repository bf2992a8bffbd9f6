# points24/config.py
import os

basedir = os.path.abspath(os.path.dirname(__file__))
projectdir = os.path.dirname(basedir)


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"

    # Database (solve history)
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or \
        "sqlite:///" + os.path.join(projectdir, "points24.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_TABLES = True
    RECORD_RUNS = True

    # Solver process
    SOLVER_PATH = os.environ.get("SOLVER_PATH") or os.path.join(projectdir, "Hegel Infix.exe")
    SOLVER_TIMEOUT = float(os.environ.get("SOLVER_TIMEOUT", "10"))
    SOLVE_TARGET = int(os.environ.get("SOLVE_TARGET", "24"))  # must match the solver build

    # Request limits
    MAX_NUMBERS = 8
    MAX_ABS_NUMBER = 1000
    DEFAULT_LIMIT = 200
    MAX_LIMIT = 1000
    MAX_CONTENT_LENGTH = 1_000_000

    # Rendering: show every argument of generic calls instead of just the first
    RENDER_ALL_CALL_ARGS = False

    # Rate limiting (Flask-Limiter)
    RATELIMIT_DEFAULT = "200 per hour; 50 per minute"
    RATELIMIT_STORAGE_URI = "memory://"
    SOLVE_RATE_LIMIT = "30 per minute"

    # Browser-side math typesetting; its origin is added to the CSP sources
    KATEX_CDN = "https://cdn.jsdelivr.net/npm/katex@0.16.11/dist"
    FRAME_OPTIONS = "DENY"
    REFERRER_POLICY = "strict-origin-when-cross-origin"

    TEMPLATES_AUTO_RELOAD = True


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_ECHO = True  # Log SQL queries


class ProductionConfig(Config):
    TEMPLATES_AUTO_RELOAD = False
    # share rate-limit counters between workers, e.g. redis://localhost:6379
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    RATELIMIT_ENABLED = False
    SOLVER_PATH = os.path.join(projectdir, "missing-solver")
