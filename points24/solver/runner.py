# points24/solver/runner.py
from __future__ import annotations
import logging
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .output import Solution, extract_solutions

logger = logging.getLogger(__name__)


class SolverError(RuntimeError):
    pass


class SolverNotFound(SolverError):
    pass


class SolverTimeout(SolverError):
    pass


@dataclass(frozen=True)
class SolverOutput:
    stdout: str
    stderr: str = ""


@dataclass
class SolveResult:
    solutions: List[Solution]
    raw: str
    stderr: str
    took_ms: int
    limit: Optional[int] = None

    @property
    def count(self) -> int:
        return len(self.solutions)

    def to_payload(self) -> dict:
        payload = {
            "solutions": [s.to_dict() for s in self.solutions],
            "count": self.count,
            "limit": self.limit,
            "tookMs": self.took_ms,
        }
        if self.stderr:
            payload["stderr"] = self.stderr
        return payload


# (numbers, limit) -> SolverOutput
SolverFn = Callable[[Sequence[int], int], SolverOutput]


@dataclass
class ProcessSolver:
    """
    Runs the native solver executable once per request.

    The solver reads one line of space-separated numbers from stdin and
    exits at EOF; the limit is applied afterwards while extracting.
    """
    executable: Path
    timeout: float = 10.0
    cwd: Optional[Path] = None
    extra_args: List[str] = field(default_factory=list)

    def __call__(self, numbers: Sequence[int], limit: int) -> SolverOutput:
        exe = Path(self.executable)
        if not exe.exists():
            raise SolverNotFound(f"{exe.name} not found")

        line = " ".join(str(int(n)) for n in numbers) + "\n"
        cwd = self.cwd or exe.parent
        logger.debug("spawning solver %s numbers=%s limit=%s", exe, line.strip(), limit)
        try:
            proc = subprocess.run(
                [str(exe), *self.extra_args],
                input=line,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                cwd=str(cwd),
            )
        except subprocess.TimeoutExpired as e:
            logger.warning("solver timed out after %ss for %s", self.timeout, line.strip())
            raise SolverTimeout("timeout") from e
        except OSError as e:
            logger.error("solver failed to start: %s", e)
            raise SolverError(str(e)) from e

        if proc.returncode != 0:
            logger.warning("solver exited with code %s", proc.returncode)
        return SolverOutput(proc.stdout or "", proc.stderr or "")


def solve(
    numbers: Sequence[int],
    limit: int,
    *,
    solver: SolverFn,
    target: int = 24,
    all_args: bool = False,
) -> SolveResult:
    """Run `solver` and turn its output into rendered solutions."""
    start = time.monotonic()
    out = solver(list(numbers), limit)
    solutions = extract_solutions(out.stdout, target=target, limit=limit, all_args=all_args)
    took_ms = int((time.monotonic() - start) * 1000)
    logger.info("solved %s: %d solution(s) in %d ms", list(numbers), len(solutions), took_ms)
    return SolveResult(
        solutions=solutions,
        raw=out.stdout,
        stderr=out.stderr,
        took_ms=took_ms,
        limit=limit,
    )
