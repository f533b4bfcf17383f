"""
Random CNF formula generation for benchmarks and property tests.
"""

import random
from typing import List, Optional, Tuple

from .clauses import Formula


# Empirically determined clause counts for balanced (phase transition) 3-SAT
BALANCED_CLAUSE_COUNTS = {
    3: 19, 4: 24, 5: 28, 6: 33, 7: 37, 8: 41, 9: 45, 10: 50,
    11: 54, 12: 58, 13: 63, 14: 67, 15: 71, 16: 76, 17: 79,
    18: 83, 19: 87, 20: 92
}


def generate_random_formula(
    n_vars: int,
    clause_length: int = 3,
    variance: float = 0.1,
    n_clauses: Optional[int] = None,
    prefix: str = "x",
    rng: Optional[random.Random] = None,
) -> Tuple[Formula, List[str]]:
    """
    Generate a random k-SAT formula near the phase transition.

    Args:
        n_vars: Number of variables.
        clause_length: Number of literals per clause (default 3 for 3-SAT).
        variance: Relative standard deviation in clause count (e.g., 0.1 = +/-10%).
        n_clauses: Fixed number of clauses. If None, uses phase transition estimate.
        prefix: Variable name prefix, variables are named prefix1..prefixN.
        rng: Random source, defaults to the module-level generator.

    Returns:
        Tuple of (clauses, variables) where:
        - clauses: List of clauses, each a mapping variable -> polarity
        - variables: Names of all variables that may appear
    """
    if clause_length > n_vars:
        raise ValueError(f"clause_length {clause_length} exceeds n_vars {n_vars}")
    rng = rng or random

    if n_clauses is None:
        base = BALANCED_CLAUSE_COUNTS.get(n_vars, int(n_vars * 4.26))
        delta = int(base * variance)
        n_clauses = rng.randint(base - delta, base + delta)

    variables = [f"{prefix}{i}" for i in range(1, n_vars + 1)]

    clauses = []
    for _ in range(n_clauses):
        clause_vars = rng.sample(variables, clause_length)
        clauses.append({var: rng.random() < 0.5 for var in clause_vars})

    return clauses, variables
