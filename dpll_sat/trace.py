"""
Optional tracing of recursive solver calls.

A tracer is an observer handed to the solver. It sees every traced call on
the way in and on the way out and prints it indented by recursion depth:

    solve <-- ( + a ) , ( - a ), {}
    solve --> UNSAT

Tracers never influence the search. Passing no tracer skips all of this.
"""

import logging
from typing import Any, Callable, List, Optional, Protocol, Tuple, runtime_checkable

from .call_stack import CallStack
from .format import fmt_assignment, fmt_formula, fmt_result

logger = logging.getLogger(__name__)

INDENT = "    "


@runtime_checkable
class Tracer(Protocol):
    """Observer protocol for traced calls."""

    def enter(self, procedure: str, args: Tuple[Any, ...]) -> None:
        ...

    def exit(self, procedure: str, result: Any) -> None:
        ...

    def fail(self, procedure: str, error: BaseException) -> None:
        ...


def fmt_arg(arg: Any) -> str:
    """Format one traced argument."""
    if isinstance(arg, list):
        return fmt_formula(arg)
    if isinstance(arg, dict):
        return "{ " + fmt_assignment(arg) + " }" if arg else "{ }"
    return repr(arg)


class LineTracer:
    """
    Base tracer that renders each event to a single indented line.

    Subclasses decide where lines go by overriding emit().
    """

    def __init__(self):
        self.stack = CallStack()

    def emit(self, line: str) -> None:
        raise NotImplementedError

    def enter(self, procedure: str, args: Tuple[Any, ...]) -> None:
        frame = self.stack.push(procedure, args)
        pad = INDENT * frame.depth
        self.emit(f"{pad}{procedure} <-- " + ", ".join(fmt_arg(arg) for arg in args))

    def exit(self, procedure: str, result: Any) -> None:
        frame = self.stack.pop()
        pad = INDENT * frame.depth
        self.emit(f"{pad}{procedure} --> {fmt_result(result)}")

    def fail(self, procedure: str, error: BaseException) -> None:
        frame = self.stack.pop()
        pad = INDENT * frame.depth
        self.emit(f"{pad}{procedure} !!! {error!r}")


class LoggingTracer(LineTracer):
    """Writes trace lines to a logger at DEBUG level."""

    def __init__(self, target: Optional[logging.Logger] = None):
        super().__init__()
        self.logger = target or logger

    def emit(self, line: str) -> None:
        self.logger.debug(line)


class RecordingTracer(LineTracer):
    """Keeps trace lines in memory."""

    def __init__(self):
        super().__init__()
        self.lines: List[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def text(self) -> str:
        return "\n".join(self.lines)


def traced(tracer: Optional[Tracer], procedure: str, impl: Callable[..., Any], *args: Any) -> Any:
    """
    Run impl(*args), reporting the call to tracer when one is given.

    Exceptions are reported and re-raised unchanged.
    """
    if tracer is None:
        return impl(*args)

    tracer.enter(procedure, args)
    try:
        result = impl(*args)
    except Exception as err:
        tracer.fail(procedure, err)
        raise
    tracer.exit(procedure, result)
    return result
