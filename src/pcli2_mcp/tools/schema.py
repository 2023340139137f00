"""Declarative tool specifications and the generic argument validator.

Each pcli2 tool is described once as a :class:`ToolSpec`: the subcommand
tokens, its parameters (with their CLI flags, JSON types and ranges) and the
argument-presence rules.  One validator interprets every spec, and the same
data renders the JSON Schema advertised by ``tools/list``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ToolArgumentError(ValueError):
    """Tool arguments failed validation."""


class ParamKind(str, Enum):
    """How an argument value is typed and rendered onto the command line."""

    FLAG = "flag"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    STRING_LIST = "string_list"
    CSV_LIST = "csv_list"


class ToolKind(str, Enum):
    """What the dispatcher does with a tool after validation."""

    TEXT = "text"
    THUMBNAIL = "thumbnail"
    CACHE_CLEANUP = "cache_cleanup"


_JSON_TYPES = {
    ParamKind.FLAG: "boolean",
    ParamKind.STRING: "string",
    ParamKind.NUMBER: "number",
    ParamKind.INTEGER: "integer",
}


class Param(BaseModel):
    """One tool argument.

    ``flag`` is the CLI option the value is rendered to; ``None`` marks a
    schema-only argument that never reaches argv.  ``alternates`` lists other
    argument keys consulted, in order, when ``key`` itself is absent.
    """

    key: str
    description: str
    kind: ParamKind = ParamKind.STRING
    flag: str | None = None
    enum: list[str] | None = None
    default: Any = None
    minimum: float | None = None
    maximum: float | None = None
    alternates: list[str] = Field(default_factory=list)

    def json_schema(self) -> dict[str, Any]:
        if self.kind in (ParamKind.STRING_LIST, ParamKind.CSV_LIST):
            schema: dict[str, Any] = {
                "oneOf": [
                    {"type": "string"},
                    {"type": "array", "items": {"type": "string"}},
                ],
            }
        else:
            schema = {"type": _JSON_TYPES[self.kind]}
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        schema["description"] = self.description
        return schema


class ToolSpec(BaseModel):
    """A named tool mapped onto one ``pcli2`` invocation.

    ``command`` holds the subcommand tokens; a token written as ``{key}`` is
    replaced by that argument's value (or its parameter default).
    ``identifiers`` lists groups of which at least one key must be supplied,
    e.g. ``("uuid", "path")``.
    """

    name: str
    description: str
    command: list[str] = Field(default_factory=list)
    params: list[Param] = Field(default_factory=list)
    required: list[str] = Field(default_factory=list)
    identifiers: list[tuple[str, ...]] = Field(default_factory=list)
    kind: ToolKind = ToolKind.TEXT

    def param(self, key: str) -> Param | None:
        for param in self.params:
            if param.key == key:
                return param
        return None

    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {p.key: p.json_schema() for p in self.params},
            "required": list(self.required),
        }

    def command_tokens(self, arguments: dict[str, Any]) -> list[str]:
        tokens: list[str] = []
        for token in self.command:
            if token.startswith("{") and token.endswith("}"):
                key = token[1:-1]
                param = self.param(key)
                value = arguments.get(key)
                if value is None and param is not None:
                    value = param.default
                tokens.append(str(value))
            else:
                tokens.append(token)
        return tokens

    def label(self, arguments: dict[str, Any] | None = None) -> str:
        return " ".join(["pcli2", *self.command_tokens(arguments or {})])


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list)):
        return len(value) > 0
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def format_number(value: float) -> str:
    """Render a JSON number the way pcli2 expects (``80`` rather than ``80.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _check_type(param: Param, value: Any) -> None:
    key = param.key
    if param.kind is ParamKind.FLAG and not isinstance(value, bool):
        msg = f"Invalid argument '{key}': expected a boolean"
        raise ToolArgumentError(msg)
    if param.kind is ParamKind.STRING and not isinstance(value, str):
        msg = f"Invalid argument '{key}': expected a string"
        raise ToolArgumentError(msg)
    if param.kind is ParamKind.NUMBER and not _is_number(value):
        msg = f"Invalid argument '{key}': expected a number"
        raise ToolArgumentError(msg)
    if param.kind is ParamKind.INTEGER and not _is_integer(value):
        msg = f"Invalid argument '{key}': expected an integer"
        raise ToolArgumentError(msg)
    if param.kind in (ParamKind.STRING_LIST, ParamKind.CSV_LIST):
        items = value if isinstance(value, list) else [value]
        if not all(isinstance(item, str) for item in items):
            msg = f"Invalid argument '{key}': expected a string or an array of strings"
            raise ToolArgumentError(msg)


def _check_range(param: Param, value: Any) -> None:
    if param.minimum is None and param.maximum is None:
        return
    if not _is_number(value):
        return
    low = param.minimum if param.minimum is not None else float("-inf")
    high = param.maximum if param.maximum is not None else float("inf")
    if value < low or value > high:
        msg = (
            f"Invalid argument '{param.key}': value {format_number(value)} "
            f"must be between {format_number(low)} and {format_number(high)}"
        )
        raise ToolArgumentError(msg)


def _emitted(spec: ToolSpec, param: Param) -> bool:
    return param.flag is not None or f"{{{param.key}}}" in spec.command


def validate_arguments(spec: ToolSpec, arguments: dict[str, Any]) -> None:
    """Validate *arguments* against *spec*, raising :class:`ToolArgumentError`.

    Checks run in a fixed order: numeric ranges, identifier groups, required
    keys, then types and enums of everything supplied.
    """
    for param in spec.params:
        value = arguments.get(param.key)
        if value is not None:
            _check_range(param, value)

    for group in spec.identifiers:
        if not any(_present(arguments.get(key)) for key in group):
            options = " or ".join(f"'{key}'" for key in group)
            msg = f"Missing required argument: provide either {options}"
            raise ToolArgumentError(msg)

    for key in spec.required:
        if not _present(arguments.get(key)):
            msg = f"Missing required argument: '{key}'"
            raise ToolArgumentError(msg)

    for param in spec.params:
        value = arguments.get(param.key)
        if value is None:
            continue
        _check_type(param, value)
        if param.enum is not None and _emitted(spec, param) and value not in param.enum:
            msg = f"Invalid argument '{param.key}': expected one of {', '.join(param.enum)}"
            raise ToolArgumentError(msg)
