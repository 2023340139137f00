"""Runtime layer: subprocess execution of the external CLI."""

from pcli2_mcp.runtime.errors import (
    OutputLimitError,
    ProcessError,
    ProcessExitError,
    ProcessSpawnError,
    ProcessTimeoutError,
)

__all__ = [
    "OutputLimitError",
    "ProcessError",
    "ProcessExitError",
    "ProcessSpawnError",
    "ProcessTimeoutError",
]
