"""
Call stack bookkeeping for traced recursive calls.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .errors import CallStackError


@dataclass
class CallStackFrame:
    """
    Represents a single frame in the call stack.

    Attributes:
        procedure: Name of the traced procedure (e.g. "solve")
        depth: Number of frames below this one
        args: Arguments the procedure was entered with
    """
    procedure: str
    depth: int = 0
    args: Tuple[Any, ...] = field(default_factory=tuple)


class CallStack:
    """
    Tracks the chain of traced calls so that each exit is paired
    with its enter and printed at the same indentation.
    """

    def __init__(self):
        self.frames: List[CallStackFrame] = []

    def push(self, procedure: str, args: Tuple[Any, ...] = ()) -> CallStackFrame:
        """
        Push a new frame onto the call stack.

        Args:
            procedure: Name of the procedure being called.
            args: Arguments of the call.

        Returns:
            The new frame.
        """
        frame = CallStackFrame(procedure=procedure, depth=len(self.frames), args=tuple(args))
        self.frames.append(frame)
        return frame

    def pop(self) -> CallStackFrame:
        """
        Pop the top frame from the call stack.

        Raises:
            CallStackError: If the stack is empty.
        """
        if not self.frames:
            raise CallStackError("Cannot pop from empty call stack")
        return self.frames.pop()

    def peek(self) -> Optional[CallStackFrame]:
        """Get the top frame without removing it, or None if empty."""
        return self.frames[-1] if self.frames else None

    def current_procedure(self) -> Optional[str]:
        frame = self.peek()
        return frame.procedure if frame else None

    def depth(self) -> int:
        return len(self.frames)

    def is_empty(self) -> bool:
        return len(self.frames) == 0

    def __repr__(self) -> str:
        if not self.frames:
            return "CallStack(empty)"
        procedures = " -> ".join(f.procedure for f in self.frames)
        return f"CallStack({procedures})"
