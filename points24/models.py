# points24/models.py
from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from .db import db

logger = logging.getLogger(__name__)


def values_key(vals: Sequence[int]) -> str:
    """
    Stable key for a hand of numbers, sorted and zero-padded.
    e.g. [4, 8, 1, 8] -> "01-04-08-08"
    """
    return "-".join(f"{int(x):02d}" for x in sorted(map(int, vals or [])))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SolveRun(db.Model):
    __tablename__ = "solve_runs"

    id             = db.Column(db.Integer, primary_key=True)
    numbers        = db.Column(db.JSON, nullable=False, default=list)
    values_key     = db.Column(db.String(64), index=True, nullable=False)
    limit          = db.Column(db.Integer)
    solution_count = db.Column(db.Integer, nullable=False, default=0)
    took_ms        = db.Column(db.Integer)
    status         = db.Column(db.String(16), nullable=False, default="ok")  # 'ok' | 'error'
    error          = db.Column(db.Text)
    created_at     = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "numbers": list(self.numbers or []),
            "values_key": self.values_key,
            "limit": self.limit,
            "count": self.solution_count,
            "tookMs": self.took_ms,
            "status": self.status,
            "error": self.error,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def record_run(numbers: Sequence[int], limit: Optional[int], *, count: int = 0,
               took_ms: Optional[int] = None, error: Optional[str] = None) -> Optional[SolveRun]:
    """Persist one solve attempt. History is best effort: DB errors are logged and rolled back."""
    run = SolveRun(
        numbers=[int(n) for n in numbers],
        values_key=values_key(numbers),
        limit=limit,
        solution_count=count,
        took_ms=took_ms,
        status="error" if error else "ok",
        error=error,
    )
    try:
        db.session.add(run)
        db.session.commit()
        return run
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to record solve run for %s", list(numbers))
        return None


def recent_runs(n: int = 20) -> List[SolveRun]:
    return (SolveRun.query
            .order_by(SolveRun.id.desc())
            .limit(n)
            .all())
