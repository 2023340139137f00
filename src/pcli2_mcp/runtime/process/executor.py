"""CommandRunner protocol: the interface the tool dispatcher depends on."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CommandRunner(Protocol):
    """Runs the external program and returns its trimmed stdout.

    Implementations raise :class:`~pcli2_mcp.runtime.errors.ProcessError`
    subclasses on any failure.
    """

    async def run(
        self,
        args: list[str],
        label: str,
        *,
        timeout: float | None = None,
        max_output_bytes: int | None = None,
    ) -> str:
        """Run the program with *args* and return stdout as text."""
        ...
