"""
Custom exceptions for the DPLL solver and its DIMACS front end.
"""


class DimacsParseError(Exception):
    """Raised when DIMACS CNF text is malformed."""

    def __init__(self, message: str, line: int = -1, token: str = ""):
        self.message = message
        self.line = line
        self.token = token
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Malformed DIMACS input: {self.message}"
        if self.line >= 0:
            msg += f"\n  Line:  {self.line}"
        if self.token:
            msg += f"\n  Token: {repr(self.token)}"
        return msg


class InvalidFormulaError(Exception):
    """Raised when a formula or seed assignment does not have the expected shape."""

    def __init__(self, value, reason: str = ""):
        self.value = value
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Invalid formula input: {repr(self.value)}"
        if self.reason:
            msg += f"\n  Reason: {self.reason}"
        return msg


class InvariantViolationError(Exception):
    """Raised on an internal defect. Never recovered from."""

    def __init__(self, message: str):
        super().__init__(message)


class CallStackError(Exception):
    """Raised when call stack operations fail."""

    def __init__(self, message: str):
        super().__init__(message)
