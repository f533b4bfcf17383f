"""
DIMACS CNF front end.

Format:
    c comment lines are ignored
    p cnf <num_vars> <num_clauses>
    1 -3 0
    2 3 -1 0

Clauses are whitespace separated integers terminated by a 0 token, so a
clause may span lines and a line may hold several clauses. Literal n means
variable prefix+n must be true, -n means it must be false. Parsing stops at
a line holding only "%" (the SATLIB end marker). A 0 with no literals
before it is the empty clause.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from .clauses import Formula
from .errors import DimacsParseError

logger = logging.getLogger(__name__)


def parse_problem_line(line: str, line_no: int = -1) -> Tuple[int, int]:
    """
    Parse 'p cnf <num_vars> <num_clauses>'.

    Returns:
        Tuple of (num_vars, num_clauses).
    """
    tokens = line.split()
    if len(tokens) != 4 or tokens[0] != "p" or tokens[1] != "cnf":
        raise DimacsParseError("expected 'p cnf <num_vars> <num_clauses>'", line_no, line)
    try:
        num_vars, num_clauses = int(tokens[2]), int(tokens[3])
    except ValueError:
        raise DimacsParseError("problem line counts must be integers", line_no, line)
    if num_vars < 0 or num_clauses < 0:
        raise DimacsParseError("problem line counts must be non-negative", line_no, line)
    return num_vars, num_clauses


def parse_dimacs(data: str, prefix: str = "x") -> Formula:
    """
    Parse DIMACS CNF text into a formula.

    Args:
        data: File contents.
        prefix: Variable name prefix, literal 3 becomes variable prefix + "3".

    Returns:
        List of clauses, each a mapping variable -> polarity.

    Raises:
        DimacsParseError: On a missing or malformed problem line, a
            non-integer clause token, or a final clause without its 0.
    """
    problem: Optional[Tuple[int, int]] = None
    clauses: Formula = []
    current: List[Tuple[str, bool]] = []
    tautology = False
    start_line = -1

    for line_no, raw in enumerate(data.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("c"):
            continue
        if line.startswith("p"):
            if problem is not None:
                raise DimacsParseError("duplicate problem line", line_no, line)
            problem = parse_problem_line(line, line_no)
            continue
        if line == "%":
            break
        if problem is None:
            raise DimacsParseError("clause data before problem line", line_no, line)

        for token in line.split():
            try:
                lit = int(token)
            except ValueError:
                raise DimacsParseError("clause tokens must be integers", line_no, token)

            if lit == 0:
                if tautology:
                    logger.debug("Dropping tautological clause ending on line %d", line_no)
                else:
                    # A bare 0 is the empty clause
                    clauses.append(dict(current))
                current = []
                tautology = False
                continue

            if not current:
                start_line = line_no
            var = f"{prefix}{abs(lit)}"
            polarity = lit > 0
            if any(v == var and p != polarity for v, p in current):
                tautology = True
            current.append((var, polarity))

    if problem is None:
        raise DimacsParseError("missing problem line")
    if current:
        raise DimacsParseError("clause is missing its terminating 0", start_line)

    num_vars, num_clauses = problem
    if num_clauses != len(clauses):
        logger.warning("Problem line declares %d clauses, found %d", num_clauses, len(clauses))
    logger.debug("Parsed %d clauses (declared %d variables)", len(clauses), num_vars)
    return clauses


def load_dimacs(path, prefix: str = "x") -> Formula:
    """Read and parse a DIMACS CNF file."""
    return parse_dimacs(Path(path).read_text(), prefix=prefix)
