"""Exceptions raised by offline-schedule collaborators."""


class InvocationError(Exception):
    """Raised when a local function invocation fails.

    Carries the function name and, when the invocation ran to completion,
    the exit code of the invocation process.
    """

    def __init__(self, function_name: str, message: str, returncode: int | None = None):
        self.function_name = function_name
        self.returncode = returncode
        super().__init__(message)
