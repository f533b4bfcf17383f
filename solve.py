#!/usr/bin/env python3
"""
Solve a DIMACS CNF file with the DPLL solver.

Prints the verdict in SAT competition style ("s SATISFIABLE" plus a
"v ... 0" model line) and exits with 10 (SAT), 20 (UNSAT) or 1 (bad input).

Usage:
    python solve.py problem.cnf
    python solve.py problem.cnf --trace
    python solve.py problem.cnf --config my.yaml solver.use_feasibility_check=false
"""

import argparse
import logging
import sys

from dpll_sat import (
    DPLLSolver,
    DimacsParseError,
    LoggingTracer,
    check_with_pysat,
    fmt_model_line,
    load_config,
    load_dimacs,
    variables_of,
)

logger = logging.getLogger(__name__)

EXIT_SAT = 10
EXIT_UNSAT = 20
EXIT_ERROR = 1


def main(argv=None):
    parser = argparse.ArgumentParser(description="Solve a DIMACS CNF file with DPLL")
    parser.add_argument("path", help="DIMACS CNF file")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config merged over the defaults"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every recursive call (implies DEBUG logging)"
    )
    parser.add_argument(
        "--pysat",
        action="store_true",
        help="Cross-check the verdict with PySAT"
    )
    parser.add_argument(
        "overrides",
        nargs="*",
        help="Config overrides, e.g. solver.verify=false"
    )
    args = parser.parse_args(argv)

    cfg = load_config(args.config, args.overrides)
    trace = args.trace or cfg.solver.trace
    logging.basicConfig(
        level=logging.DEBUG if trace else cfg.log_level,
        format="%(message)s" if trace else "%(levelname)s %(name)s: %(message)s"
    )

    try:
        clauses = load_dimacs(args.path, prefix=cfg.dimacs.variable_prefix)
    except (OSError, DimacsParseError) as e:
        logger.error("%s", e)
        return EXIT_ERROR

    logger.info("Loaded %s: %d clauses", args.path, len(clauses))

    solver = DPLLSolver(clauses, config=cfg.solver, tracer=LoggingTracer() if trace else None)
    satisfiable = solver.solve()

    logger.info(
        "Search: %d calls, %d decisions, %d backtracks, depth %d, %.2f ms",
        solver.stats.calls, solver.stats.decisions, solver.stats.backtracks,
        solver.stats.max_depth, solver.stats.elapsed * 1000
    )

    if args.pysat:
        check_with_pysat(clauses, solver.assignment)

    if satisfiable:
        print("s SATISFIABLE")
        print(fmt_model_line(solver.assignment, variables_of(clauses), prefix=cfg.dimacs.variable_prefix))
        return EXIT_SAT

    print("s UNSATISFIABLE")
    return EXIT_UNSAT


if __name__ == "__main__":
    sys.exit(main())
