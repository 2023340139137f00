"""The pcli2 tool catalog.

Pure data: every tool advertised by ``tools/list`` and the flags its
arguments map to.  Parameters are listed in the order they are rendered onto
the command line.
"""

from __future__ import annotations

from pcli2_mcp.tools.schema import Param, ParamKind, ToolKind, ToolSpec

UUID_OR_PATH = ("uuid", "path")
FOLDER_UUID_OR_PATH = ("folder_uuid", "folder_path")

# ---------------------------------------------------------------------------
# Shared parameters
# ---------------------------------------------------------------------------


def tenant() -> Param:
    return Param(key="tenant", flag="-t", description="Tenant ID or alias.")


def headers() -> Param:
    return Param(key="headers", flag="--headers", kind=ParamKind.FLAG, description="Include headers in output.")


def pretty() -> Param:
    return Param(key="pretty", flag="--pretty", kind=ParamKind.FLAG, description="Pretty output.")


def metadata() -> Param:
    return Param(key="metadata", flag="--metadata", kind=ParamKind.FLAG, description="Include metadata in output.")


def output_format(*values: str) -> Param:
    return Param(key="format", flag="-f", enum=list(values), description="Output format.")


def uuid_path() -> list[Param]:
    return [
        Param(key="uuid", flag="--uuid", description="Resource UUID."),
        Param(key="path", flag="--path", description="Resource path, e.g. /Root/Folder/Asset.stl."),
    ]


def folder_uuid_path() -> list[Param]:
    return [
        Param(key="folder_uuid", flag="--folder-uuid", description="Folder UUID."),
        Param(
            key="folder_path",
            flag="--folder-path",
            description="Folder path, e.g. /Root/Child/Grandchild.",
        ),
    ]


def folder_path_list() -> Param:
    return Param(
        key="folder_path",
        flag="--folder-path",
        kind=ParamKind.STRING_LIST,
        description="Folder path(s) to process.",
    )


def threshold() -> Param:
    return Param(
        key="threshold",
        flag="--threshold",
        kind=ParamKind.NUMBER,
        minimum=0,
        maximum=100,
        description="Similarity threshold (0.00 to 100.00). Default 80.0.",
    )


def exclusive() -> Param:
    return Param(
        key="exclusive",
        flag="--exclusive",
        kind=ParamKind.FLAG,
        description="Only show matches within the specified paths.",
    )


def progress() -> Param:
    return Param(
        key="progress",
        flag="--progress",
        kind=ParamKind.FLAG,
        description="Display progress bar during processing.",
    )


def concurrent() -> Param:
    return Param(
        key="concurrent",
        flag="--concurrent",
        kind=ParamKind.INTEGER,
        minimum=1,
        maximum=10,
        description="Maximum number of concurrent operations (1-10).",
    )


def _folder_match(name: str, subcommand: str, *, with_threshold: bool) -> ToolSpec:
    params = [tenant(), folder_path_list()]
    if with_threshold:
        params.append(threshold())
    params += [
        exclusive(),
        headers(),
        metadata(),
        pretty(),
        output_format("json", "csv"),
        concurrent(),
        progress(),
    ]
    return ToolSpec(
        name=name,
        description=f"Runs `pcli2 folder {subcommand}`.",
        command=["folder", subcommand],
        params=params,
        required=["folder_path"],
    )


def _asset_match(name: str, subcommand: str, description: str, *, with_threshold: bool) -> ToolSpec:
    params = [tenant(), *uuid_path()]
    if with_threshold:
        params.append(threshold())
    params += [headers(), metadata(), pretty(), output_format("json", "csv")]
    return ToolSpec(
        name=name,
        description=description,
        command=["asset", subcommand],
        params=params,
        identifiers=[UUID_OR_PATH],
    )


_RESPONSE_MODE_DESCRIPTION = (
    "Output format: 'url' returns an HTTP URL (efficient for LLM context, ~200 tokens), "
    "'data_url' returns a base64 data URI (self-contained image, ~50K tokens but renders "
    "immediately in markdown without HTTP fetch). Use 'data_url' when the client cannot "
    "make HTTP requests or when you need the image to display immediately."
)

_TENANT_STATES = [
    "indexing",
    "finished",
    "failed",
    "unsupported",
    "no-3d-data",
    "missing-dependencies",
]


def build_catalog() -> list[ToolSpec]:
    """Return every tool in advertisement order."""
    return [
        ToolSpec(
            name="pcli2",
            description=(
                "Physna Command Line Interface v2 (PCLI2). Runs `pcli2 folder list` or "
                "`pcli2 asset list` with the provided options."
            ),
            command=["{resource}", "list"],
            params=[
                Param(
                    key="resource",
                    enum=["folder", "asset"],
                    default="folder",
                    description="Resource to list. Defaults to folder.",
                ),
                tenant(),
                metadata(),
                headers(),
                pretty(),
                output_format("json", "csv", "tree"),
                Param(key="folder_uuid", flag="--folder-uuid", description="Folder UUID."),
                Param(key="folder_path", flag="--folder-path", description="Folder path, e.g. /Root/Child."),
                Param(
                    key="reload",
                    flag="--reload",
                    kind=ParamKind.FLAG,
                    description="Reload folder cache from server.",
                ),
            ],
        ),
        ToolSpec(
            name="pcli2_tenant_list",
            description="Runs `pcli2 tenant list`.",
            command=["tenant", "list"],
            params=[headers(), pretty(), output_format("json", "csv")],
        ),
        ToolSpec(
            name="pcli2_version",
            description="Runs `pcli2 --version`.",
            command=["--version"],
        ),
        ToolSpec(
            name="pcli2_config_get",
            description="Runs `pcli2 config get`.",
            command=["config", "get"],
            params=[headers(), pretty(), output_format("json", "csv", "tree")],
        ),
        ToolSpec(
            name="pcli2_config_get_path",
            description="Runs `pcli2 config get path`.",
            command=["config", "get", "path"],
            params=[output_format("json", "csv", "tree")],
        ),
        ToolSpec(
            name="pcli2_config_environment_list",
            description="Runs `pcli2 config environment list`.",
            command=["config", "environment", "list"],
            params=[headers(), pretty(), output_format("json", "csv")],
        ),
        ToolSpec(
            name="pcli2_config_environment_get",
            description="Runs `pcli2 config environment get`.",
            command=["config", "environment", "get"],
            params=[
                Param(
                    key="name",
                    flag="-n",
                    description="Environment name (defaults to active environment).",
                ),
                headers(),
                pretty(),
                output_format("json", "csv"),
            ],
        ),
        ToolSpec(
            name="pcli2_tenant_get",
            description="Runs `pcli2 tenant get` (current tenant).",
            command=["tenant", "get"],
            params=[headers(), pretty(), output_format("json", "csv", "tree")],
        ),
        ToolSpec(
            name="pcli2_tenant_state",
            description="Runs `pcli2 tenant state`.",
            command=["tenant", "state"],
            params=[
                tenant(),
                Param(key="type", flag="--type", enum=_TENANT_STATES, description="Filter assets by state."),
                headers(),
                pretty(),
                output_format("json", "csv"),
            ],
        ),
        ToolSpec(
            name="pcli2_tenant_use",
            description="Runs `pcli2 tenant use --name <tenantName>`.",
            command=["tenant", "use"],
            params=[
                Param(key="name", description="Tenant short name (as shown in tenant list)."),
                Param(
                    key="tenant_name",
                    flag="--name",
                    alternates=["name"],
                    description="Tenant short name (alias for name).",
                ),
                Param(
                    key="refresh",
                    flag="--refresh",
                    kind=ParamKind.FLAG,
                    description="Force refresh cache data from API.",
                ),
                headers(),
                pretty(),
                output_format("json", "csv"),
            ],
            identifiers=[("tenant_name", "name")],
        ),
        ToolSpec(
            name="pcli2_folder_get",
            description="Runs `pcli2 folder get`.",
            command=["folder", "get"],
            params=[
                tenant(),
                *folder_uuid_path(),
                metadata(),
                headers(),
                pretty(),
                output_format("json", "csv", "tree"),
            ],
            identifiers=[FOLDER_UUID_OR_PATH],
        ),
        ToolSpec(
            name="pcli2_folder_resolve",
            description="Runs `pcli2 folder resolve`.",
            command=["folder", "resolve"],
            params=[
                tenant(),
                Param(
                    key="folder_path",
                    flag="--folder-path",
                    description="Folder path, e.g. /Root/Child/Grandchild.",
                ),
            ],
            required=["folder_path"],
        ),
        ToolSpec(
            name="pcli2_folder_dependencies",
            description="Runs `pcli2 folder dependencies`.",
            command=["folder", "dependencies"],
            params=[
                tenant(),
                folder_path_list(),
                headers(),
                metadata(),
                pretty(),
                output_format("json", "csv", "tree"),
                progress(),
            ],
            required=["folder_path"],
        ),
        _folder_match("pcli2_folder_geometric_match", "geometric-match", with_threshold=True),
        _folder_match("pcli2_folder_part_match", "part-match", with_threshold=True),
        _folder_match("pcli2_folder_visual_match", "visual-match", with_threshold=False),
        ToolSpec(
            name="pcli2_asset_get",
            description="Runs `pcli2 asset get`.",
            command=["asset", "get"],
            params=[tenant(), *uuid_path(), headers(), metadata(), pretty(), output_format("json", "csv")],
            identifiers=[UUID_OR_PATH],
        ),
        ToolSpec(
            name="pcli2_asset_dependencies",
            description="Runs `pcli2 asset dependencies`.",
            command=["asset", "dependencies"],
            params=[
                tenant(),
                *uuid_path(),
                metadata(),
                headers(),
                pretty(),
                output_format("json", "csv", "tree"),
            ],
            identifiers=[UUID_OR_PATH],
        ),
        ToolSpec(
            name="pcli2_asset_thumbnail",
            description=(
                "Runs `pcli2 asset thumbnail` and returns the thumbnail image. Use `response_mode` "
                "to control the output format: 'url' returns an HTTP URL (efficient for LLM context, "
                "requires HTTP fetch), 'data_url' returns a base64 data URI (self-contained, uses "
                "more tokens but renders immediately in markdown)."
            ),
            command=["asset", "thumbnail"],
            params=[
                tenant(),
                *uuid_path(),
                Param(
                    key="response_mode",
                    enum=["url", "data_url"],
                    default="url",
                    description=_RESPONSE_MODE_DESCRIPTION,
                ),
            ],
            identifiers=[UUID_OR_PATH],
            kind=ToolKind.THUMBNAIL,
        ),
        ToolSpec(
            name="pcli2_asset_reprocess",
            description="Runs `pcli2 asset reprocess`.",
            command=["asset", "reprocess"],
            params=[tenant(), *uuid_path()],
            identifiers=[UUID_OR_PATH],
        ),
        _asset_match(
            "pcli2_geometric_match",
            "geometric-match",
            "Physna Command Line Interface v2 (PCLI2). Runs `pcli2 asset geometric-match` "
            "with the provided options.",
            with_threshold=True,
        ),
        _asset_match(
            "pcli2_asset_part_match",
            "part-match",
            "Runs `pcli2 asset part-match`.",
            with_threshold=True,
        ),
        _asset_match(
            "pcli2_asset_visual_match",
            "visual-match",
            "Runs `pcli2 asset visual-match`.",
            with_threshold=False,
        ),
        ToolSpec(
            name="pcli2_asset_text_match",
            description="Runs `pcli2 asset text-match`.",
            command=["asset", "text-match"],
            params=[
                tenant(),
                Param(key="text", flag="--text", description="Text query to search for in assets."),
                Param(
                    key="fuzzy",
                    flag="--fuzzy",
                    kind=ParamKind.FLAG,
                    description="Perform fuzzy search instead of exact search.",
                ),
                headers(),
                metadata(),
                pretty(),
                output_format("json", "csv"),
            ],
            required=["text"],
        ),
        ToolSpec(
            name="pcli2_asset_metadata_create",
            description="Runs `pcli2 asset metadata create`.",
            command=["asset", "metadata", "create"],
            params=[
                tenant(),
                *uuid_path(),
                Param(key="name", flag="--name", description="Metadata property name."),
                Param(key="value", flag="--value", description="Metadata property value."),
                Param(
                    key="type",
                    flag="--type",
                    enum=["text", "number", "boolean"],
                    description="Metadata field type.",
                ),
            ],
            required=["name", "value"],
            identifiers=[UUID_OR_PATH],
        ),
        ToolSpec(
            name="pcli2_asset_metadata_delete",
            description="Runs `pcli2 asset metadata delete`.",
            command=["asset", "metadata", "delete"],
            params=[
                tenant(),
                *uuid_path(),
                Param(
                    key="name",
                    flag="--name",
                    kind=ParamKind.CSV_LIST,
                    description=(
                        "Metadata property name. Can be a string, comma-separated string, or array."
                    ),
                ),
                output_format("json", "csv"),
            ],
            required=["name"],
            identifiers=[UUID_OR_PATH],
        ),
        ToolSpec(
            name="pcli2_thumbnail_cache_cleanup",
            description="Removes expired thumbnails from the cache to free up disk space.",
            kind=ToolKind.CACHE_CLEANUP,
        ),
    ]


TOOLS: dict[str, ToolSpec] = {spec.name: spec for spec in build_catalog()}
