from dpll_sat import DPLLSolver, RecordingTracer, fmt_result, parse_dimacs, solve

# Example SAT problem: (x1 OR NOT x3) AND (x2 OR x3 OR NOT x1)
clauses = parse_dimacs("p cnf 3 2\n1 -3 0\n2 3 -1 0\n")

# Solve with a tracer attached
tracer = RecordingTracer()
solver = DPLLSolver(clauses, tracer=tracer)
solver.solve()

print(tracer.text())
print(f"Result: {fmt_result(solver.assignment)}")

# Conflicting unit clauses
print(f"Result: {fmt_result(solve([{'a': True}, {'a': False}]))}")
