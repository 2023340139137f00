"""ProcessRunner: executes pcli2 with bounded output capture and a timeout.

stdout and stderr are drained by two concurrent tasks while a third waits for
the process to exit.  All three are joined under a single wall-clock timeout.
Any failure on that path (timeout, output overflow, cancellation) kills and
reaps the process before the error propagates, so no child is left running.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import shlex

from pcli2_mcp.runtime.errors import (
    OutputLimitError,
    ProcessError,
    ProcessExitError,
    ProcessSpawnError,
    ProcessTimeoutError,
)
from pcli2_mcp.runtime.process.models import ProcessConfig, ProcessRequest, ProcessResult
from pcli2_mcp.utils.telemetry import ATTR_EXIT_CODE, ATTR_PROCESS_LABEL, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

_CHUNK_SIZE = 64 * 1024


def render_command(argv: list[str]) -> str:
    """Render *argv* as a shell-quoted string for log output only."""
    return " ".join(shlex.quote(arg) for arg in argv)


async def read_limited(
    stream: asyncio.StreamReader,
    limit: int,
    stream_name: str,
    label: str,
) -> bytes:
    """Read *stream* to EOF, raising :class:`OutputLimitError` past *limit* bytes."""
    buf = bytearray()
    while True:
        try:
            chunk = await stream.read(_CHUNK_SIZE)
        except OSError as exc:
            raise ProcessError(label, f"failed to read {stream_name}: {exc}") from exc
        if not chunk:
            return bytes(buf)
        if len(buf) + len(chunk) > limit:
            raise OutputLimitError(label, stream_name, limit)
        buf.extend(chunk)


class ProcessRunner:
    """Runs the configured executable directly (never through a shell).

    Satisfies the :class:`~pcli2_mcp.runtime.process.executor.CommandRunner`
    protocol.

    Usage::

        runner = ProcessRunner(ProcessConfig(executable="/usr/local/bin/pcli2"))
        text = await runner.run(["tenant", "list"], "pcli2 tenant list")
    """

    def __init__(self, config: ProcessConfig | None = None) -> None:
        self._config = config or ProcessConfig()

    @property
    def config(self) -> ProcessConfig:
        return self._config

    async def run(
        self,
        args: list[str],
        label: str,
        *,
        timeout: float | None = None,
        max_output_bytes: int | None = None,
    ) -> str:
        """Run with *args* and return trimmed stdout, or raise on non-zero exit."""
        request = ProcessRequest(
            args=args,
            label=label,
            timeout=timeout,
            max_output_bytes=max_output_bytes,
        )
        result = await self.execute(request)
        if result.ok:
            return result.stdout_text()
        raise ProcessExitError(label, result.exit_code, result.stdout_text(), result.stderr_text())

    async def execute(self, request: ProcessRequest) -> ProcessResult:
        """Spawn the process and capture both streams under the timeout."""
        timeout = request.timeout or self._config.timeout
        limit = request.max_output_bytes or self._config.max_output_bytes
        argv = [self._config.executable, *request.args]
        logger.info("Running %s", render_command(argv))

        with _tracer.start_as_current_span("pcli2_mcp.process.execute") as span:
            span.set_attribute(ATTR_PROCESS_LABEL, request.label)
            try:
                proc = await asyncio.create_subprocess_exec(
                    *argv,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as exc:
                raise ProcessSpawnError(request.label, f"failed to execute {argv[0]}: {exc}") from exc

            if proc.stdout is None or proc.stderr is None:
                await _terminate(proc, [])
                raise ProcessSpawnError(request.label, "failed to capture output streams")

            tasks: list[asyncio.Future[object]] = [
                asyncio.ensure_future(read_limited(proc.stdout, limit, "stdout", request.label)),
                asyncio.ensure_future(read_limited(proc.stderr, limit, "stderr", request.label)),
                asyncio.ensure_future(proc.wait()),
            ]
            try:
                stdout, stderr, exit_code = await asyncio.wait_for(asyncio.gather(*tasks), timeout=timeout)
            except TimeoutError:
                await _terminate(proc, tasks)
                logger.warning("%s timed out after %ss; process killed", request.label, timeout)
                raise ProcessTimeoutError(request.label, timeout) from None
            except (ProcessError, asyncio.CancelledError):
                await _terminate(proc, tasks)
                raise

            span.set_attribute(ATTR_EXIT_CODE, exit_code)

        return ProcessResult(exit_code=exit_code, stdout=stdout, stderr=stderr)


async def _terminate(proc: asyncio.subprocess.Process, tasks: list[asyncio.Future[object]]) -> None:
    """Kill *proc*, cancel outstanding drain/wait tasks and reap the child."""
    if proc.returncode is None:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    await proc.wait()
