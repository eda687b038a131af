"""Stepping lifecycle shared by incremental solvers.

A solver implements ``_step()`` — one bounded unit of work that may set
``solved`` or ``failed``.  Drivers call ``step()`` as often as they like
(e.g. a few per frame while rendering) or ``solve()`` to run to the end.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from hyperroute.config import SOLVER_DEFAULTS


log = logging.getLogger(__name__)


class BaseSolver:
    """Run-to-completion bookkeeping around a single-step ``_step()``."""

    def __init__(self, max_iterations: int = SOLVER_DEFAULTS.max_iterations) -> None:
        self.max_iterations = max_iterations
        self.iterations = 0
        self.solved = False
        self.failed = False
        self.error: str | None = None
        self.time_to_solve: float | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    def step(self) -> None:
        """Do one unit of work.  No-op once the run has ended."""
        if self.solved or self.failed:
            return
        self.iterations += 1
        try:
            self._step()
        except Exception as exc:
            self.error = f"{self.name} error: {exc}"
            self.failed = True
            log.exception("%s failed on iteration %d", self.name, self.iterations)
            raise
        if not self.solved and not self.failed and self.iterations >= self.max_iterations:
            self.error = f"{self.name} ran out of iterations"
            self.failed = True
            log.warning("%s: %s (%d)", self.name, self.error, self.max_iterations)

    def solve(self) -> None:
        """Step until solved or failed."""
        start = time.monotonic()
        while not self.solved and not self.failed:
            self.step()
        self.time_to_solve = time.monotonic() - start

    def _step(self) -> None:
        raise NotImplementedError

    def get_output(self) -> Any:
        return None

    def visualize(self) -> dict:
        return {"rects": [], "points": [], "lines": []}
