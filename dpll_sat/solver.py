"""
DPLL SAT solver over CNF formulas.

The search is the classical recursive backtracking procedure:
pick a variable (unit clauses first), try True then False, simplify the
formula under the chosen value and recurse. The first satisfying branch
wins. Each call works on its own reduced copy of the formula and its own
extended copy of the assignment, so a failed branch leaves no trace.
"""

import logging
import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .clauses import (
    Assignment, Formula, can_assign, new_assignment, next_var, remove_var,
    validate_assignment, validate_formula, variables_of
)
from .config import SolverConfig
from .trace import Tracer, traced
from .verifier import verify_result

logger = logging.getLogger(__name__)


@dataclass
class SolverStats:
    """Counters collected during one search."""
    calls: int = 0        # recursive search calls
    decisions: int = 0    # branches entered
    backtracks: int = 0   # calls where both values failed
    max_depth: int = 0
    elapsed: float = 0.0  # seconds

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DPLLSolver:
    """
    DPLL SAT solver.

    Attributes:
        clauses: Private copy of the input formula.
        seed: Initial assignment the witness is built on.
        assignment: Satisfying assignment after solve(), None if unsatisfiable.
        stats: SolverStats for the last solve() call.
    """

    def __init__(
        self,
        clauses: Formula,
        assignment: Optional[Assignment] = None,
        config: Optional[SolverConfig] = None,
        tracer: Optional[Tracer] = None,
    ):
        self.clauses = validate_formula(clauses)
        self.seed = validate_assignment(assignment) if assignment is not None else {}
        self.config = config if config is not None else SolverConfig()
        self.tracer = tracer

        self.assignment: Optional[Assignment] = None
        self.stats = SolverStats()
        self._depth = 0

    def solve(self) -> bool:
        """
        Run the search.

        Returns True if satisfiable, False if unsatisfiable.

        Raises:
            InvariantViolationError: If verification is enabled and the
                witness does not satisfy the input formula.
        """
        self.stats = SolverStats()
        self._depth = 0

        # Seeded variables are fixed up front and never branched on.
        clauses = self.clauses
        for variable, value in self.seed.items():
            clauses = remove_var(value, variable, clauses)

        logger.debug(
            "Solving %d clauses over %d variables (seed: %d)",
            len(self.clauses), len(variables_of(self.clauses)), len(self.seed)
        )

        old_limit = sys.getrecursionlimit()
        if self.config.recursion_limit > old_limit:
            sys.setrecursionlimit(self.config.recursion_limit)
        start = time.perf_counter()
        try:
            result = self._search(clauses, dict(self.seed))
        finally:
            self.stats.elapsed = time.perf_counter() - start
            sys.setrecursionlimit(old_limit)

        if result is not None and self.config.verify:
            verify_result(self.clauses, result)

        self.assignment = result
        logger.debug(
            "%s after %d calls, %d decisions, %d backtracks (%.3fs)",
            "SAT" if result is not None else "UNSAT",
            self.stats.calls, self.stats.decisions, self.stats.backtracks, self.stats.elapsed
        )
        return result is not None

    def _search(self, clauses: Formula, assignment: Assignment) -> Optional[Assignment]:
        if self.tracer is None:
            return self._step(clauses, assignment)
        return traced(self.tracer, "solve", self._step, clauses, assignment)

    def _step(self, clauses: Formula, assignment: Assignment) -> Optional[Assignment]:
        """One DPLL node: select, branch True then False, backtrack."""
        self.stats.calls += 1
        self._depth += 1
        self.stats.max_depth = max(self.stats.max_depth, self._depth)
        try:
            selection = next_var(clauses)
            if selection.solved:
                return assignment
            if selection.failed:
                return None

            variable = selection.variable
            for value in (True, False):
                if self.config.use_feasibility_check and not can_assign(value, variable, clauses):
                    continue
                self.stats.decisions += 1
                result = self._search(
                    remove_var(value, variable, clauses),
                    new_assignment(assignment, variable, value)
                )
                if result is not None:
                    return result

            self.stats.backtracks += 1
            return None
        finally:
            self._depth -= 1


def solve(
    clauses: Formula,
    assignment: Optional[Assignment] = None,
    tracer: Optional[Tracer] = None,
    config: Optional[SolverConfig] = None,
) -> Optional[Assignment]:
    """
    Decide satisfiability of a CNF formula.

    Args:
        clauses: List of clauses, each a mapping variable -> required polarity.
        assignment: Optional initial assignment the witness extends.
        tracer: Optional observer of every recursive call.
        config: Optional SolverConfig.

    Returns:
        A satisfying assignment covering every variable fixed along the
        successful branch, or None if the formula is unsatisfiable.

    Raises:
        InvalidFormulaError: If the input is not a formula.
    """
    solver = DPLLSolver(clauses, assignment=assignment, config=config, tracer=tracer)
    solver.solve()
    return solver.assignment
