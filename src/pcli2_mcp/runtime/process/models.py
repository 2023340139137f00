"""Data models for the process execution subsystem."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

PCLI2_BIN_ENV = "PCLI2_BIN"
DEFAULT_EXECUTABLE = "pcli2"
DEFAULT_TIMEOUT = 30 * 60.0
MAX_OUTPUT_BYTES = 200 * 1024 * 1024


def default_executable() -> str:
    """Return ``$PCLI2_BIN`` if set, otherwise ``pcli2`` (resolved on the PATH)."""
    return os.environ.get(PCLI2_BIN_ENV) or DEFAULT_EXECUTABLE


class ProcessConfig(BaseModel):
    """Configuration for a :class:`~pcli2_mcp.runtime.process.runner.ProcessRunner`."""

    executable: str = Field(default_factory=default_executable, description="Path or name of the pcli2 executable.")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Max wall-clock time per invocation in seconds.")
    max_output_bytes: int = Field(default=MAX_OUTPUT_BYTES, gt=0, description="Per-stream capture limit in bytes.")


class ProcessRequest(BaseModel):
    """A single invocation of the external program."""

    args: list[str] = Field(..., description="Arguments passed after the executable.")
    label: str = Field(..., description="Human-readable label used in logs and error messages.")
    timeout: float | None = Field(default=None, description="Per-request timeout override.")
    max_output_bytes: int | None = Field(default=None, description="Per-request output limit override.")


class ProcessResult(BaseModel):
    """Raw result of a finished invocation."""

    exit_code: int = Field(..., description="Process exit code (negative when killed by a signal).")
    stdout: bytes = Field(default=b"", description="Captured stdout.")
    stderr: bytes = Field(default=b"", description="Captured stderr.")

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def stdout_text(self) -> str:
        return self.stdout.decode(errors="replace").rstrip()

    def stderr_text(self) -> str:
        return self.stderr.decode(errors="replace").rstrip()
