"""Command builder: turns a validated tool call into pcli2 argv tokens."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pcli2_mcp.tools.schema import ParamKind, ToolArgumentError, format_number

if TYPE_CHECKING:
    from pcli2_mcp.tools.schema import Param, ToolSpec


def _resolve(param: Param, arguments: dict[str, Any]) -> Any:
    for key in (param.key, *param.alternates):
        value = arguments.get(key)
        if value is not None:
            return value
    return None


def _list_values(param: Param, value: Any) -> list[str]:
    items = value if isinstance(value, list) else [value]
    strings = [item for item in items if isinstance(item, str)]
    if param.kind is ParamKind.CSV_LIST:
        return [part.strip() for item in strings for part in item.split(",") if part.strip()]
    return strings


def build_args(spec: ToolSpec, arguments: dict[str, Any], extra: list[str] | None = None) -> list[str]:
    """Return the argv (without the executable) for *spec* called with *arguments*.

    Parameters are emitted in declaration order; *extra* tokens are appended
    last.
    """
    args = spec.command_tokens(arguments)
    for param in spec.params:
        if param.flag is None:
            continue
        value = _resolve(param, arguments)
        if value is None:
            continue

        if param.kind is ParamKind.FLAG:
            if value is True:
                args.append(param.flag)
        elif param.kind in (ParamKind.STRING_LIST, ParamKind.CSV_LIST):
            values = _list_values(param, value)
            if not values and param.key in spec.required:
                msg = f"Missing required argument: '{param.key}'"
                raise ToolArgumentError(msg)
            for item in values:
                args.extend([param.flag, item])
        elif param.kind in (ParamKind.NUMBER, ParamKind.INTEGER):
            args.extend([param.flag, format_number(value)])
        else:
            args.extend([param.flag, str(value)])

    if extra:
        args.extend(extra)
    return args
