"""
DPLL SAT Solver Package

This package provides a recursive DPLL solver for CNF formulas given as
lists of clauses (mappings from variable to required polarity), a DIMACS
CNF front end, optional call tracing, and tools for checking and
benchmarking solver results.
"""

from .clauses import (
    Selection, SelectionKind, next_var, can_assign, remove_var,
    new_assignment, variables_of, validate_formula
)
from .solver import DPLLSolver, SolverStats, solve
from .dimacs import parse_dimacs, load_dimacs
from .formula import generate_random_formula
from .verifier import is_satisfied, verify_result, brute_force_satisfiable, check_with_pysat
from .collector import collect_results, save_results
from .format import fmt_clause, fmt_formula, fmt_assignment, fmt_result, fmt_model_line

# Tracing and configuration
from .trace import Tracer, LoggingTracer, RecordingTracer
from .call_stack import CallStack, CallStackFrame
from .config import Config, SolverConfig, load_config
from .errors import DimacsParseError, InvalidFormulaError, InvariantViolationError, CallStackError

__all__ = [
    # Solver
    'DPLLSolver',
    'SolverStats',
    'solve',

    # Clause operations
    'Selection',
    'SelectionKind',
    'next_var',
    'can_assign',
    'remove_var',
    'new_assignment',
    'variables_of',
    'validate_formula',

    # DIMACS
    'parse_dimacs',
    'load_dimacs',

    # Formula generation
    'generate_random_formula',

    # Verification
    'is_satisfied',
    'verify_result',
    'brute_force_satisfiable',
    'check_with_pysat',

    # Benchmarking
    'collect_results',
    'save_results',

    # Formatting
    'fmt_clause',
    'fmt_formula',
    'fmt_assignment',
    'fmt_result',
    'fmt_model_line',

    # Tracing
    'Tracer',
    'LoggingTracer',
    'RecordingTracer',
    'CallStack',
    'CallStackFrame',

    # Configuration
    'Config',
    'SolverConfig',
    'load_config',

    # Errors
    'DimacsParseError',
    'InvalidFormulaError',
    'InvariantViolationError',
    'CallStackError',
]
