"""Process subsystem: bounded execution of the pcli2 executable."""

from pcli2_mcp.runtime.process.executor import CommandRunner
from pcli2_mcp.runtime.process.models import ProcessConfig, ProcessRequest, ProcessResult
from pcli2_mcp.runtime.process.runner import ProcessRunner, render_command

__all__ = [
    "CommandRunner",
    "ProcessConfig",
    "ProcessRequest",
    "ProcessResult",
    "ProcessRunner",
    "render_command",
]
