"""OpenTelemetry tracing for the RPC, tool and subprocess layers.

Modules take a tracer from :func:`get_tracer`; until :func:`configure_telemetry`
installs an SDK provider (``pcli2-mcp serve --telemetry``) every span is a
no-op, so instrumentation costs nothing in the default install.

Span names::

    pcli2_mcp.rpc               one JSON-RPC request
    pcli2_mcp.tools.call        one tools/call dispatch
    pcli2_mcp.process.execute   one pcli2 subprocess
"""

from __future__ import annotations

import os
import sys
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from pcli2_mcp import __version__

ATTR_RPC_METHOD = "pcli2_mcp.rpc.method"
ATTR_RPC_ERROR_CODE = "pcli2_mcp.rpc.error_code"
ATTR_TOOL_NAME = "pcli2_mcp.tool.name"
ATTR_PROCESS_LABEL = "pcli2_mcp.process.label"
ATTR_EXIT_CODE = "pcli2_mcp.process.exit_code"
ATTR_CACHE_KEY = "pcli2_mcp.cache.key"

OTLP_ENDPOINT_ENV = "OTEL_EXPORTER_OTLP_ENDPOINT"

_INSTRUMENTATION_NAME = "pcli2_mcp"
_INSTALL_HINT = "Install it with: pip install pcli2-mcp[otel]"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME, __version__)


def mark_failed(span: trace.Span, exc: BaseException) -> None:
    """Record *exc* on *span* and set its status to ERROR."""
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR, str(exc)))


def configure_telemetry(
    *,
    service_name: str = "pcli2-mcp",
    export_to_console: bool = True,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider (requires the ``otel`` extra).

    Console spans go to stderr so they never mix with CLI output.
    *otlp_endpoint* falls back to ``$OTEL_EXPORTER_OTLP_ENDPOINT``; when
    neither is set no OTLP exporter is attached.

    Raises :class:`ImportError` if the SDK or the OTLP exporter is missing.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-sdk is required for configure_telemetry(). {_INSTALL_HINT}"
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name, "service.version": __version__})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    endpoint = otlp_endpoint or os.environ.get(OTLP_ENDPOINT_ENV)
    if endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, endpoint)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    provider.add_span_processor(processor_cls(ConsoleSpanExporter(out=sys.stderr)))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = f"opentelemetry-exporter-otlp is required for OTLP export. {_INSTALL_HINT}"
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
