"""
Clause store operations for the DPLL search.

A formula is an ordered list of clauses. Each clause maps a variable to the
polarity that satisfies it, so {"a": True, "b": False} reads (a OR NOT b).
Every operation here is pure: inputs are never mutated and fresh
structures are returned, so sibling branches of the search never observe
each other's state.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional

from .errors import InvalidFormulaError, InvariantViolationError

Variable = Hashable
Clause = Dict[Variable, bool]
Formula = List[Clause]
Assignment = Dict[Variable, bool]


class SelectionKind(Enum):
    """Outcome of picking the next branching variable."""
    SOLVED = auto()   # no clauses left, current assignment satisfies the formula
    FAILED = auto()   # an empty clause is present, this branch is dead
    BRANCH = auto()   # branch on Selection.variable


@dataclass(frozen=True)
class Selection:
    """Tagged result of next_var()."""
    kind: SelectionKind
    variable: Optional[Variable] = None

    @property
    def solved(self) -> bool:
        return self.kind is SelectionKind.SOLVED

    @property
    def failed(self) -> bool:
        return self.kind is SelectionKind.FAILED


SOLVED = Selection(SelectionKind.SOLVED)
FAILED = Selection(SelectionKind.FAILED)


def next_var(clauses: Formula) -> Selection:
    """
    Pick the next variable to branch on.

    Unit clauses win so their value is forced first. Otherwise the first
    variable of the first clause is used.

    Returns:
        FAILED if any clause is empty, SOLVED if no clause is left,
        otherwise a BRANCH selection carrying the variable.
    """
    if any(len(clause) == 0 for clause in clauses):
        return FAILED

    for clause in clauses:
        if len(clause) == 1:
            return Selection(SelectionKind.BRANCH, next(iter(clause)))

    for clause in clauses:
        for variable in clause:
            return Selection(SelectionKind.BRANCH, variable)

    return SOLVED


def can_assign(value: bool, variable: Variable, clauses: Formula) -> bool:
    """
    Check that variable := value does not contradict a unit clause.

    Multi-literal clauses never block an assignment: one of their other
    literals may still satisfy them. An empty clause does not block either,
    it is caught by next_var() on the reduced formula.
    """
    return all(
        len(clause) != 1 or variable not in clause or clause[variable] == value
        for clause in clauses
    )


def remove_var(value: bool, variable: Variable, clauses: Formula) -> Formula:
    """
    Simplify the formula under variable := value.

    Clauses satisfied by the assignment are dropped, and the variable is
    stripped from every remaining clause whatever its polarity there.
    """
    return [
        {var: polarity for var, polarity in clause.items() if var != variable}
        for clause in clauses
        if clause.get(variable) != value
    ]


def new_assignment(original: Assignment, variable: Variable, value: bool) -> Assignment:
    """Return a copy of original extended with variable := value."""
    if original.get(variable, value) != value:
        raise InvariantViolationError(
            f"Variable {variable!r} reassigned from {original[variable]} to {value} within one branch"
        )
    result = dict(original)
    result[variable] = value
    return result


def variables_of(clauses: Iterable[Mapping[Variable, bool]]) -> List[Variable]:
    """List every variable of the formula once, in first-appearance order."""
    seen: Dict[Variable, None] = {}
    for clause in clauses:
        for variable in clause:
            seen.setdefault(variable, None)
    return list(seen)


def validate_formula(clauses: Any) -> Formula:
    """
    Check the formula shape and return a private copy of it.

    Raises:
        InvalidFormulaError: If the formula is not a sequence of mappings
            from variables to bools.
    """
    if isinstance(clauses, (str, bytes, Mapping)) or not isinstance(clauses, Iterable):
        raise InvalidFormulaError(clauses, "formula must be a sequence of clauses")

    formula: Formula = []
    for index, clause in enumerate(clauses):
        if not isinstance(clause, Mapping):
            raise InvalidFormulaError(clause, f"clause {index} is not a mapping")
        for variable, polarity in clause.items():
            if not isinstance(polarity, bool):
                raise InvalidFormulaError(
                    clause, f"clause {index} maps {variable!r} to non-bool {polarity!r}"
                )
        formula.append(dict(clause))
    return formula


def validate_assignment(assignment: Any) -> Assignment:
    """Check a seed assignment and return a private copy of it."""
    if not isinstance(assignment, Mapping):
        raise InvalidFormulaError(assignment, "assignment must be a mapping")
    for variable, value in assignment.items():
        if not isinstance(value, bool):
            raise InvalidFormulaError(assignment, f"{variable!r} is assigned non-bool {value!r}")
    return dict(assignment)
