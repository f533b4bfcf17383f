#!/usr/bin/env python3
"""
Tests for the DPLL solver and its clause operations.

Checks:
1. Variable selection, feasibility, reduction and assignment extension
2. Known SAT / UNSAT scenarios
3. Every returned assignment satisfies its formula
4. Verdicts match truth-table enumeration on random small formulas
5. Tracing reports calls without changing results
"""

import random
import sys

from dpll_sat import (
    DPLLSolver,
    RecordingTracer,
    SelectionKind,
    SolverConfig,
    brute_force_satisfiable,
    can_assign,
    generate_random_formula,
    is_satisfied,
    new_assignment,
    next_var,
    remove_var,
    solve,
    verify_result,
    CallStack,
    CallStackError,
    InvalidFormulaError,
    InvariantViolationError,
)
from dpll_sat.trace import traced


UNSATISFIABLE = [
    [{"a": True}, {"a": False}],
    [{"a": True, "b": False}, {"b": True}, {"a": False}],
    [{}],
    [{"a": True, "b": True}, {"a": True, "b": False}, {"a": False, "b": True}, {"a": False, "b": False}],
]

SATISFIABLE = [
    [],
    [{"a": False}],
    [{"a": True}],
    [{"a": True, "b": True}, {"b": True}],
    [{"a": True, "b": True}, {"b": False}],
    [{"a": True, "b": True}, {"a": False, "b": False}],
    [{"a": True, "b": True, "c": False}, {"a": False, "b": False}, {"b": True, "c": False}],
    [{"a": True, "b": True, "c": False}, {"a": False, "b": False}, {"b": True, "c": True}],
    [{"a": True, "b": False, "c": False}, {"a": False, "b": False}, {"b": True, "c": True}],
    [{"a": True, "b": True}, {"b": True, "c": True}],
    [{"a": False, "b": True}, {"b": False}, {"c": False, "b": True}],
    [{"x": True, "y": True}, {"x": False, "y": True}],
    [{1: True, 2: False}, {2: True, 3: True}, {1: False, 3: False}],
]


def test_next_var():
    """Test variable selection."""
    print("Testing next_var...")

    assert next_var([]).kind == SelectionKind.SOLVED
    assert next_var([{}]).kind == SelectionKind.FAILED
    assert next_var([{"x": True, "y": False}, {}]).kind == SelectionKind.FAILED

    selection = next_var([{"x": False}])
    assert selection.kind == SelectionKind.BRANCH
    assert selection.variable == "x"

    assert next_var([{"x": False, "y": False}]).variable == "x"

    # Unit clauses come first even when they appear later
    assert next_var([{"a": True, "b": True}, {"c": False}]).variable == "c"
    # Integer variables, including 0, are valid names
    assert next_var([{0: True, 1: True}]).variable == 0
    print("  next_var: PASS")


def test_can_assign():
    """Test the unit clause feasibility check."""
    print("\nTesting can_assign...")

    assert can_assign(True, "x", [])
    # Clause is unsat, but the assignment itself is fine
    assert can_assign(True, "x", [{}])
    assert can_assign(True, "x", [{"y": True}])
    assert can_assign(True, "x", [{"y": False}])
    assert can_assign(True, "x", [{"x": True}])
    assert not can_assign(True, "x", [{"x": False}])
    assert can_assign(False, "x", [{"x": False}])
    # Multi-literal clauses never block
    assert can_assign(True, "x", [{"x": False, "y": True}])
    assert can_assign(False, "x", [{"x": True, "y": True}])
    print("  can_assign: PASS")


def test_remove_var():
    """Test clause reduction."""
    print("\nTesting remove_var...")

    clauses = [{1: False, 3: True}, {2: False}, {2: True, 3: False}]
    assert remove_var(True, 1, clauses) == [{3: True}, {2: False}, {2: True, 3: False}]
    assert remove_var(False, 1, clauses) == [{2: False}, {2: True, 3: False}]

    # Input untouched
    assert clauses == [{1: False, 3: True}, {2: False}, {2: True, 3: False}]

    # Opposite unit clause becomes empty
    assert remove_var(True, "a", [{"a": False}]) == [{}]

    rng = random.Random(7)
    for _ in range(50):
        formula, variables = generate_random_formula(6, rng=rng)
        var = rng.choice(variables)
        value = rng.random() < 0.5
        reduced = remove_var(value, var, formula)
        assert len(reduced) <= len(formula)
        assert all(var not in clause for clause in reduced)
    print("  remove_var: PASS")


def test_new_assignment():
    """Test assignment extension."""
    print("\nTesting new_assignment...")

    assert new_assignment({}, "x", True) == {"x": True}
    assert new_assignment({}, "y", False) == {"y": False}

    original = {"x": False}
    extended = new_assignment(original, "y", True)
    assert extended == {"x": False, "y": True}
    assert original == {"x": False}
    assert extended is not original

    try:
        new_assignment({"x": False}, "x", True)
        assert False, "reassignment should raise"
    except InvariantViolationError:
        pass
    print("  new_assignment: PASS")


def test_known_formulas():
    """Test solver verdicts on hand-written formulas."""
    print("\nTesting known formulas...")

    for problem in UNSATISFIABLE:
        assert solve(problem) is None, problem

    for problem in SATISFIABLE:
        assignment = solve(problem)
        assert assignment is not None, problem
        assert is_satisfied(problem, assignment), (problem, assignment)

    assert solve([]) == {}
    assert solve([{"a": True, "b": True}, {"a": False, "b": False}]) == {"a": True, "b": False}
    print("  Known formulas: PASS")


def test_random_formulas_match_brute_force(count: int = 200, verbose: bool = False):
    """Test soundness and completeness against truth-table enumeration."""
    print(f"\nTesting {count} random formulas...")

    rng = random.Random(2024)
    sat_count = 0
    for i in range(count):
        n_vars = 3 + (i % 6)
        clauses, _ = generate_random_formula(n_vars, rng=rng)

        expected = brute_force_satisfiable(clauses)
        actual = solve(clauses)
        assert (expected is None) == (actual is None), clauses
        if actual is not None:
            sat_count += 1
            assert is_satisfied(clauses, actual)

        unpruned = solve(clauses, config=SolverConfig(use_feasibility_check=False))
        assert (unpruned is None) == (actual is None)

    if verbose:
        print(f"  {sat_count} SAT, {count - sat_count} UNSAT")
    print("  Random formulas: PASS")


def test_seed_assignment():
    """Test solving on top of an initial assignment."""
    print("\nTesting seed assignment...")

    assert solve([{"a": True, "b": True}], {"a": False}) == {"a": False, "b": True}
    assert solve([{"a": True}], {"a": False}) is None
    assert solve([], {"z": True}) == {"z": True}

    seed = {"a": False}
    solve([{"a": True, "b": True}], seed)
    assert seed == {"a": False}
    print("  Seed assignment: PASS")


def test_invalid_input():
    """Test malformed formulas are rejected rather than solved."""
    print("\nTesting invalid input...")

    for bad in ("abc", [["a"]], [{"a": 1}], {"a": True}, None):
        try:
            solve(bad)
            assert False, f"{bad!r} should be rejected"
        except InvalidFormulaError:
            pass

    try:
        solve([{"a": True}], {"a": "yes"})
        assert False, "non-bool seed should be rejected"
    except InvalidFormulaError:
        pass
    print("  Invalid input: PASS")


def test_verify_result():
    """Test witness verification."""
    print("\nTesting verify_result...")

    verify_result([{"a": True, "b": False}], {"b": False})
    try:
        verify_result([{"a": True}, {"b": True}], {"a": True})
        assert False, "unsatisfied clause should raise"
    except InvariantViolationError:
        pass
    print("  verify_result: PASS")


def test_stats():
    """Test search statistics."""
    print("\nTesting solver stats...")

    solver = DPLLSolver([{"a": True, "b": True}, {"a": False, "b": False}])
    assert solver.solve()
    assert solver.assignment == {"a": True, "b": False}
    assert solver.stats.calls == 3
    assert solver.stats.decisions == 2
    assert solver.stats.backtracks == 0
    assert solver.stats.max_depth == 3

    solver = DPLLSolver([{"a": True}, {"a": False}])
    assert not solver.solve()
    assert solver.assignment is None
    assert solver.stats.calls == 1
    assert solver.stats.backtracks == 1
    print("  Stats: PASS")


def test_deep_formula():
    """Test that a long chain of unit clauses does not hit the recursion limit."""
    print("\nTesting deep formula...")

    clauses = [{f"x{i}": i % 2 == 0} for i in range(600)]
    before = sys.getrecursionlimit()
    assignment = solve(clauses)
    assert assignment is not None
    assert len(assignment) == 600
    assert sys.getrecursionlimit() == before
    print("  Deep formula: PASS")


def test_tracer():
    """Test trace output and that tracing does not change results."""
    print("\nTesting tracer...")

    tracer = RecordingTracer()
    result = solve([{"a": True, "b": True}, {"a": False, "b": False}], tracer=tracer)
    assert result == {"a": True, "b": False}
    assert tracer.lines == [
        "solve <-- ( + a + b ) , ( - a - b ), { }",
        "    solve <-- ( - b ), { a = True }",
        "        solve <-- { }, { a = True , b = False }",
        "        solve --> SAT [ a = True , b = False ]",
        "    solve --> SAT [ a = True , b = False ]",
        "solve --> SAT [ a = True , b = False ]",
    ]
    assert tracer.stack.is_empty()

    tracer = RecordingTracer()
    assert solve([{"a": True}, {"a": False}], tracer=tracer) is None
    assert tracer.lines == ["solve <-- ( + a ) , ( - a ), { }", "solve --> UNSAT"]

    for problem in SATISFIABLE + UNSATISFIABLE:
        assert solve(problem, tracer=RecordingTracer()) == solve(problem)

    def boom():
        raise ValueError("bad")

    tracer = RecordingTracer()
    try:
        traced(tracer, "boom", boom)
        assert False, "error should propagate"
    except ValueError:
        pass
    assert tracer.lines == ["boom <-- ", "boom !!! ValueError('bad')"]
    print("  Tracer: PASS")


def test_call_stack():
    """Test the call stack."""
    print("\nTesting call stack...")

    stack = CallStack()

    assert stack.is_empty()
    assert stack.depth() == 0

    frame = stack.push("solve", ([], {}))
    assert frame.depth == 0
    assert stack.current_procedure() == "solve"

    frame = stack.push("solve")
    assert frame.depth == 1
    assert stack.depth() == 2

    assert stack.pop().depth == 1
    assert stack.pop().depth == 0

    try:
        stack.pop()
        assert False, "pop on empty stack should raise"
    except CallStackError:
        pass
    print("  Call stack: PASS")


def main():
    """Run all tests."""
    print("=" * 50)
    print("DPLL Solver Tests")
    print("=" * 50)

    verbose = "--verbose" in sys.argv or "-v" in sys.argv

    tests = [
        test_next_var,
        test_can_assign,
        test_remove_var,
        test_new_assignment,
        test_known_formulas,
        lambda: test_random_formulas_match_brute_force(verbose=verbose),
        test_seed_assignment,
        test_invalid_input,
        test_verify_result,
        test_stats,
        test_deep_formula,
        test_tracer,
        test_call_stack,
    ]

    all_passed = True
    for test in tests:
        try:
            test()
        except AssertionError as e:
            print(f"  FAIL: {e}")
            all_passed = False

    print("\n" + "=" * 50)
    if all_passed:
        print("ALL TESTS PASSED")
    else:
        print("SOME TESTS FAILED")
    print("=" * 50)

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
