"""
Benchmark collection: solve many formulas, time them, aggregate results.
"""

import json
import logging
import random
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from tqdm import tqdm

from .clauses import Formula, variables_of
from .config import SolverConfig
from .dimacs import load_dimacs
from .formula import generate_random_formula
from .solver import DPLLSolver
from .trace import LoggingTracer
from .verifier import check_with_pysat

logger = logging.getLogger(__name__)


def file_formulas(paths: Iterable[str], prefix: str = "x") -> Iterator[Tuple[str, Formula]]:
    """Yield (name, formula) for each DIMACS file."""
    for path in paths:
        yield Path(path).name, load_dimacs(path, prefix=prefix)


def random_formulas(
    count: int,
    var_min: int,
    var_max: int,
    clause_length: int = 3,
    seed: Optional[int] = None,
    prefix: str = "x",
) -> Iterator[Tuple[str, Formula]]:
    """Yield (name, formula) for count random k-SAT formulas."""
    rng = random.Random(seed)
    for i in range(count):
        n_vars = rng.randint(var_min, var_max)
        clauses, _ = generate_random_formula(n_vars, clause_length=clause_length, prefix=prefix, rng=rng)
        yield f"random-{i}-v{n_vars}", clauses


def collect_results(
    formulas: Iterable[Tuple[str, Formula]],
    config: Optional[SolverConfig] = None,
    repeat: int = 1,
    pysat_check: bool = False,
) -> Dict:
    """
    Solve every formula and record verdict, timing and search statistics.

    Args:
        formulas: Iterable of (name, formula).
        config: Solver configuration.
        repeat: Number of timed runs per formula, elapsed is their mean.
        pysat_check: Whether to cross-check each verdict against PySAT.

    Returns:
        Dictionary with per-problem records and a summary.

    Raises:
        InvariantViolationError: If pysat_check is set and PySAT disagrees.
    """
    if repeat < 1:
        raise ValueError(f"repeat must be at least 1, got {repeat}")

    config = config if config is not None else SolverConfig()
    records: List[Dict] = []

    for name, clauses in tqdm(list(formulas), desc="Solving formulas"):
        total = 0.0
        for _ in range(repeat):
            tracer = LoggingTracer() if config.trace else None
            solver = DPLLSolver(clauses, config=config, tracer=tracer)
            satisfiable = solver.solve()
            total += solver.stats.elapsed

        record = {
            "name": name,
            "n_vars": len(variables_of(clauses)),
            "n_clauses": len(clauses),
            "satisfiable": satisfiable,
            **solver.stats.as_dict(),
            "elapsed": total / repeat,
        }

        if pysat_check:
            record["pysat_agrees"] = check_with_pysat(clauses, solver.assignment)

        logger.info(
            "%s: %s in %.2f ms", name, "SAT" if satisfiable else "UNSAT", record["elapsed"] * 1000
        )
        records.append(record)

    return {
        "results": records,
        "summary": summarize(records),
    }


def summarize(records: List[Dict]) -> Dict:
    """Aggregate counts and timings over benchmark records."""
    if not records:
        return {"problems": 0, "sat": 0, "unsat": 0, "total_elapsed": 0.0, "max_elapsed": 0.0}
    elapsed = [r["elapsed"] for r in records]
    sat = sum(1 for r in records if r["satisfiable"])
    return {
        "problems": len(records),
        "sat": sat,
        "unsat": len(records) - sat,
        "total_elapsed": sum(elapsed),
        "max_elapsed": max(elapsed),
        "mean_decisions": sum(r["decisions"] for r in records) / len(records),
    }


def save_results(data: Dict, output_path: str) -> None:
    """Write collect_results() output as JSON."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(data, f, indent=2)
    logger.info("Saved %d results to %s", len(data["results"]), path)
