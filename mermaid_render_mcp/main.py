from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from fastmcp import FastMCP
from fastmcp.tools.tool import ToolResult
from loguru import logger
from mcp.types import TextContent, ToolAnnotations

from . import __version__
from .dispatcher import RenderDispatcher
from .engines import create_engine
from .exceptions import DiagramToolError
from .registry import ToolDefinition, ToolRegistry
from .schema import (
    ListPresetsRequest,
    PresetListResponse,
    RenderResult,
    TextArtRenderRequest,
    VectorRenderRequest,
)
from .settings import get_settings
from .shard import constants as C
from .shard.enums import ToolName
from .shard.instructions import SERVER_INSTRUCTIONS, TOOL_DESCRIPTIONS, TOOL_TITLES
from .utils.reports import render_presets_markdown, render_vector_report

settings = get_settings()

app = FastMCP(
    C.SERVER_NAME,
    instructions=SERVER_INSTRUCTIONS,
    version=__version__,
    on_duplicate_tools="error",
)

# Handlers look this up at call time; tests swap the engine on it.
dispatcher = RenderDispatcher(create_engine(settings), scratch_dir=settings.output_dir)


def _raise_failure(result: RenderResult) -> NoReturn:
    """Convert a failed RenderResult into the registry's error path.

    RegisteredTool.run turns DiagramToolError into a FastMCP ToolError, which
    clients receive as an MCP error response with isError=True.
    """
    raise DiagramToolError.from_error(result.failure_error())


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


async def handle_render_vector(req: VectorRenderRequest) -> ToolResult:
    """Render to SVG on disk; report the path, never the bytes."""
    result = await dispatcher.render_vector(req)
    if not result.ok:
        _raise_failure(result)

    output = result.persisted_output()
    structured = {
        "ok": True,
        "file_path": output.path,
        "size_bytes": output.size_bytes,
        "preset": result.summary.get("preset"),
        "overrides": result.summary.get("overrides") or {},
    }
    return ToolResult(content=_text(render_vector_report(output, result.summary)), structured_content=structured)


async def handle_render_text_art(req: TextArtRenderRequest) -> ToolResult:
    result = await dispatcher.render_text_art(req)
    if not result.ok:
        _raise_failure(result)
    return ToolResult(content=_text(result.inline_output().text))


async def handle_list_presets(req: ListPresetsRequest) -> ToolResult:
    presets = dispatcher.list_presets()
    structured = PresetListResponse(presets=[{"name": p.name, **p.colors()} for p in presets])
    return ToolResult(content=_text(render_presets_markdown(presets)), structured_content=structured.model_dump())


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        name=ToolName.RENDER_VECTOR.value,
        title=TOOL_TITLES[ToolName.RENDER_VECTOR.value],
        description=TOOL_DESCRIPTIONS[ToolName.RENDER_VECTOR.value],
        request_model=VectorRenderRequest,
        annotations=ToolAnnotations(
            title=TOOL_TITLES[ToolName.RENDER_VECTOR.value],
            readOnlyHint=False,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
    ),
    ToolDefinition(
        name=ToolName.RENDER_TEXT_ART.value,
        title=TOOL_TITLES[ToolName.RENDER_TEXT_ART.value],
        description=TOOL_DESCRIPTIONS[ToolName.RENDER_TEXT_ART.value],
        request_model=TextArtRenderRequest,
        annotations=ToolAnnotations(
            title=TOOL_TITLES[ToolName.RENDER_TEXT_ART.value],
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
    ),
    ToolDefinition(
        name=ToolName.LIST_PRESETS.value,
        title=TOOL_TITLES[ToolName.LIST_PRESETS.value],
        description=TOOL_DESCRIPTIONS[ToolName.LIST_PRESETS.value],
        request_model=ListPresetsRequest,
        annotations=ToolAnnotations(
            title=TOOL_TITLES[ToolName.LIST_PRESETS.value],
            readOnlyHint=True,
            destructiveHint=False,
            idempotentHint=True,
            openWorldHint=False,
        ),
    ),
)

TOOL_HANDLERS = {
    ToolName.RENDER_VECTOR.value: handle_render_vector,
    ToolName.RENDER_TEXT_ART.value: handle_render_text_art,
    ToolName.LIST_PRESETS.value: handle_list_presets,
}


def build_registry() -> ToolRegistry:
    """Register every tool definition with its handler.

    Raises DuplicateToolError on a name clash; the server cannot start then.
    """
    registry = ToolRegistry()
    for definition in TOOL_DEFINITIONS:
        registry.register(definition, TOOL_HANDLERS[definition.name])
    return registry


registry = build_registry()
registry.bind(app)


def configure_logging(level: str) -> None:
    # stdout carries the stdio transport; logs go to stderr only.
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def main() -> None:
    parser = argparse.ArgumentParser(description="Mermaid Render MCP Server")
    # Only accept transports supported by FastMCP for server runs. SSE is
    # legacy but still supported for backward compatibility.
    parser.add_argument(
        "--transport",
        choices=["stdio", "http", "sse", "streamable-http"],
        help="Transport to use (stdio, sse, http, streamable-http). Default: stdio",
    )
    parser.add_argument("--host", help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level for stderr output")
    args = parser.parse_args()

    configure_logging(args.log_level)

    transport = args.transport or "stdio"
    logger.info(f"{C.SERVER_NAME} {__version__} running via {transport} ({len(registry)} tools)")

    # FastMCP's stdio transport does not accept `host`/`port` kwargs.
    http_transports = {"http", "sse", "streamable-http"}
    try:
        if transport in http_transports:
            app.run(transport=transport, host=args.host, port=args.port)
        else:
            app.run()
    except Exception as e:
        logger.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
