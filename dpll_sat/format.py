"""
Text formatting for formulas, assignments and solver results.

Used by the tracers and by the command line scripts.
"""

import re
from typing import Iterable, Optional

from .clauses import Assignment, Clause, Formula, Variable


def fmt_var(var: Variable) -> str:
    """Format variable: 'x1' -> 'x1', 5 -> '5'"""
    return str(var)


def fmt_lit(var: Variable, polarity: bool) -> str:
    """Format literal: ('x5', False) -> '- x5', ('x5', True) -> '+ x5'"""
    sign = '+' if polarity else '-'
    return f"{sign} {fmt_var(var)}"


def fmt_clause(clause: Clause, clause_id: Optional[str] = None) -> str:
    """
    Format clause: {'x1': True, 'x2': False} -> '( + x1 - x2 )'
    With ID: '( + x1 - x2 ) : c 0'
    Empty clause: '( )'
    """
    lits = ' '.join(fmt_lit(var, polarity) for var, polarity in clause.items())
    result = f"( {lits} )" if lits else "( )"
    if clause_id is not None:
        result += f" : {clause_id}"
    return result


def fmt_formula(clauses: Formula) -> str:
    """Format formula as comma separated clauses, '{ }' when empty."""
    if not clauses:
        return '{ }'
    return ' , '.join(fmt_clause(clause) for clause in clauses)


def fmt_assignment(assignment: Assignment) -> str:
    """Format assignment: {'x1': True, 'x2': False} -> 'x1 = True , x2 = False'"""
    if not assignment:
        return ''
    return ' , '.join(f"{fmt_var(var)} = {value}" for var, value in assignment.items())


def fmt_result(result: Optional[Assignment]) -> str:
    """Format solve() result: 'UNSAT' or 'SAT [ x1 = True ]'"""
    if result is None:
        return "UNSAT"
    return f"SAT [ {fmt_assignment(result)} ]"


def fmt_model_line(assignment: Assignment, variables: Iterable[Variable], prefix: str = "x") -> str:
    """
    Format a DIMACS-style model line: 'v 1 -2 3 0'.

    Variables must be named prefix + index, as produced by parse_dimacs().
    Variables absent from the assignment are don't-cares and reported as true.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
    literals = []
    for var in variables:
        match = pattern.match(str(var))
        if match is None:
            continue
        index = int(match.group(1))
        literals.append(index if assignment.get(var, True) else -index)
    literals.sort(key=abs)
    return ' '.join(['v'] + [str(lit) for lit in literals] + ['0'])
