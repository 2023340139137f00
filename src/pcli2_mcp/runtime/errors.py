"""Shared error types for the subprocess execution layer."""


class ProcessError(Exception):
    """Base error for all ``pcli2`` invocation failures.

    Renders as ``"<label> failed: <detail>"`` so callers can surface the
    message verbatim.
    """

    def __init__(self, label: str, detail: str = "") -> None:
        self.label = label
        self.detail = detail
        super().__init__(f"{label} failed" + (f": {detail}" if detail else ""))


class ProcessSpawnError(ProcessError):
    """The executable could not be started."""


class ProcessExitError(ProcessError):
    """The process exited with a non-zero status."""

    def __init__(self, label: str, exit_code: int, stdout: str, stderr: str) -> None:
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(label, f"exit status {exit_code}\n{stdout}\n{stderr}")


class ProcessTimeoutError(ProcessError):
    """The process exceeded the configured wall-clock timeout."""

    def __init__(self, label: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(label, f"timed out after {timeout}s")


class OutputLimitError(ProcessError):
    """One of the captured streams exceeded the configured size limit."""

    def __init__(self, label: str, stream: str, limit: int) -> None:
        self.stream = stream
        self.limit = limit
        super().__init__(label, f"{stream} exceeded maximum output size of {limit} bytes")
