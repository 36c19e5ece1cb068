from typing import Optional, Sequence


class BridgeError(Exception):
    pass


class ExecutionFailure(BridgeError):
    """The external program could not be started, exited non-zero, or printed nothing."""

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        returncode: Optional[int] = None,
        stderr: Sequence[str] = (),
    ):
        super().__init__(message)
        self.cause = cause
        self.returncode = returncode
        self.stderr = list(stderr)


class ExecutionTimeout(ExecutionFailure):
    pass


class NoResultFound(BridgeError):
    pass


class AnalysisFailure(BridgeError):
    """Caller-facing failure. Its message is generic; the cause stays in the logs."""
    pass
