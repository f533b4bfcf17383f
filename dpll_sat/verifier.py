"""
Solution checking for CNF formulas.

Checks witnesses returned by the solver, enumerates truth tables for small
formulas and cross-checks verdicts against an external solver (PySAT).
"""

import itertools
import logging
from typing import Dict, List, Optional, Tuple

from .clauses import Assignment, Formula, Variable, variables_of
from .errors import InvariantViolationError

logger = logging.getLogger(__name__)

# Truth-table enumeration above this many variables is refused.
MAX_BRUTE_FORCE_VARS = 20


def is_satisfied(clauses: Formula, assignment: Assignment) -> bool:
    """True if every clause has a variable assigned its required polarity."""
    return all(
        any(var in assignment and assignment[var] == polarity for var, polarity in clause.items())
        for clause in clauses
    )


def unsatisfied_clauses(clauses: Formula, assignment: Assignment) -> List[int]:
    """Indices of clauses not satisfied by the assignment."""
    return [
        index for index, clause in enumerate(clauses)
        if not any(var in assignment and assignment[var] == polarity for var, polarity in clause.items())
    ]


def verify_result(clauses: Formula, assignment: Assignment) -> None:
    """
    Check a witness returned by the solver.

    Raises:
        InvariantViolationError: If some clause is not satisfied.
    """
    failing = unsatisfied_clauses(clauses, assignment)
    if failing:
        raise InvariantViolationError(
            f"Solver returned an assignment that violates {len(failing)} clause(s), "
            f"first at index {failing[0]}"
        )


def brute_force_satisfiable(clauses: Formula) -> Optional[Assignment]:
    """
    Find a satisfying assignment by enumerating the truth table.

    Returns:
        The first satisfying total assignment, or None if unsatisfiable.

    Raises:
        ValueError: If the formula has more than MAX_BRUTE_FORCE_VARS variables.
    """
    variables = variables_of(clauses)
    if len(variables) > MAX_BRUTE_FORCE_VARS:
        raise ValueError(
            f"Refusing to enumerate {len(variables)} variables (max {MAX_BRUTE_FORCE_VARS})"
        )
    for values in itertools.product((True, False), repeat=len(variables)):
        candidate = dict(zip(variables, values))
        if is_satisfied(clauses, candidate):
            return candidate
    return None


def to_int_clauses(clauses: Formula) -> Tuple[List[List[int]], Dict[Variable, int]]:
    """
    Number the variables 1..n and encode clauses as signed integer lists.

    Returns:
        Tuple of (int_clauses, var2id).
    """
    var2id = {var: i + 1 for i, var in enumerate(variables_of(clauses))}
    int_clauses = [
        [var2id[var] if polarity else -var2id[var] for var, polarity in clause.items()]
        for clause in clauses
    ]
    return int_clauses, var2id


def check_with_pysat(clauses: Formula, assignment: Optional[Assignment]) -> bool:
    """
    Cross-check a verdict against PySAT's Glucose3.

    Args:
        clauses: The formula.
        assignment: Our witness, or None when we reported unsatisfiable.

    Returns:
        True when PySAT agrees.

    Raises:
        InvariantViolationError: If PySAT reaches the other verdict or
            rejects the witness.
    """
    from pysat.solvers import Glucose3

    int_clauses, var2id = to_int_clauses(clauses)

    g = Glucose3()
    try:
        for clause in int_clauses:
            g.add_clause(clause)
        is_sat_pysat = g.solve()
        if is_sat_pysat != (assignment is not None):
            raise InvariantViolationError(
                f"PySAT disagrees: PySAT says {'SAT' if is_sat_pysat else 'UNSAT'}, "
                f"solver says {'SAT' if assignment is not None else 'UNSAT'}"
            )
        if assignment is not None:
            assumptions = [
                var2id[var] if value else -var2id[var]
                for var, value in assignment.items() if var in var2id
            ]
            if not g.solve(assumptions=assumptions):
                raise InvariantViolationError("PySAT rejects the solver's assignment")
    finally:
        g.delete()
    logger.debug("PySAT agrees: %s", "SAT" if assignment is not None else "UNSAT")
    return True
