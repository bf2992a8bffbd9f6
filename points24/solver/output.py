# points24/solver/output.py
"""
Helpers around the solver's text protocol.

The native solver prints one candidate per line as ``<infix> = <target>``.
The first line also carries the interactive prompt (``请输入数字…：``) and the
first-solution search prefixes lines with ``>>> ``; both are stripped here.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional

from points24.expr import try_infix_to_latex

_SPLIT_RE = re.compile(r"[\s,]+")
_LINE_RE = re.compile(r"\r?\n")
_PROMPT_RE = re.compile(r"^>>>\s*")
_FIRST_TOKEN_RE = re.compile(r"(sqrt|lg|lb|log|[0-9(\-])")
_NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


@dataclass(frozen=True)
class Solution:
    infix: str
    latex: str

    def to_dict(self):
        return {"infix": self.infix, "latex": self.latex}


def parse_numbers(text: str) -> List[int]:
    """'4, 4 10 10' -> [4, 4, 10, 10]; parts that aren't plain integers are dropped.

    Only ASCII digits with an optional leading '-' count, so "1_000", "+5"
    and full-width digits are dropped; "3.0" still reads as 3.
    """
    out: List[int] = []
    for part in _SPLIT_RE.split(text or ""):
        if not _NUMBER_RE.fullmatch(part):
            continue
        whole, _, frac = part.partition(".")
        if frac.strip("0"):
            continue
        try:
            out.append(int(whole))
        except ValueError:  # past the interpreter's int digit limit
            continue
    return out


def strip_prompt(line: str) -> str:
    cleaned = line.strip()
    if cleaned.startswith(">>>"):
        cleaned = _PROMPT_RE.sub("", cleaned)
    cut = max(cleaned.rfind("："), cleaned.rfind(":"))
    if cut != -1:
        cleaned = cleaned[cut + 1:].strip()
    m = _FIRST_TOKEN_RE.search(cleaned)
    if m and m.start() > 0:
        cleaned = cleaned[m.start():].strip()
    return cleaned


def extract_solutions(
    output: str,
    target: int = 24,
    limit: Optional[int] = None,
    all_args: bool = False,
) -> List[Solution]:
    """
    Pull unique ``<infix> = <target>`` candidates out of raw solver output,
    in order, each paired with its LaTeX markup.
    """
    marker = f" = {target}"
    solutions: List[Solution] = []
    seen = set()
    for line in _LINE_RE.split(output or ""):
        idx = line.rfind(marker)
        if idx <= 0:
            continue
        expr = strip_prompt(line[:idx].strip())
        if not expr or expr in seen:
            continue
        seen.add(expr)
        latex, _ok = try_infix_to_latex(expr, all_args=all_args)
        solutions.append(Solution(expr, latex))
        if limit and limit > 0 and len(solutions) >= limit:
            break
    return solutions
