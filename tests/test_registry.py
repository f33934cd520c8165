from __future__ import annotations

import pytest
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent, ToolAnnotations

from mermaid_render_mcp.exceptions import DuplicateToolError, RenderEngineError, SchemaValidationError
from mermaid_render_mcp.registry import ToolDefinition, ToolRegistry
from mermaid_render_mcp.schema import TextArtRenderRequest


def _definition(name: str = "render-text-art") -> ToolDefinition:
    return ToolDefinition(
        name=name,
        title="Render",
        description="Render text art",
        request_model=TextArtRenderRequest,
        annotations=ToolAnnotations(readOnlyHint=True, idempotentHint=True, openWorldHint=False),
    )


class Recorder:
    def __init__(self, error: Exception | None = None) -> None:
        self.requests = []
        self.error = error

    async def __call__(self, req):
        self.requests.append(req)
        if self.error:
            raise self.error
        return ToolResult(content=[TextContent(type="text", text="ok")])


def test_duplicate_name_is_rejected():
    registry = ToolRegistry()
    registry.register(_definition(), Recorder())
    with pytest.raises(DuplicateToolError):
        registry.register(_definition(), Recorder())
    assert registry.names() == ["render-text-art"]


def test_definition_is_immutable():
    definition = _definition()
    with pytest.raises(Exception):
        definition.name = "other"  # type: ignore[misc]


def test_registered_tool_advertises_strict_schema():
    registry = ToolRegistry()
    tool = registry.register(_definition(), Recorder())
    assert tool.name == "render-text-art"
    assert tool.parameters["additionalProperties"] is False
    assert "diagram_source" in tool.parameters["properties"]
    assert tool.annotations.readOnlyHint is True


@pytest.mark.asyncio
async def test_call_validates_then_dispatches():
    handler = Recorder()
    registry = ToolRegistry()
    registry.register(_definition(), handler)

    await registry.call("render-text-art", {"diagram_source": "graph LR; A --> B", "color_mode": "ansi16"})

    assert len(handler.requests) == 1
    assert isinstance(handler.requests[0], TextArtRenderRequest)
    assert handler.requests[0].color_mode == "ansi16"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "arguments, field",
    [
        ({"diagram_source": ""}, "diagram_source"),
        ({}, "diagram_source"),
        ({"diagram_source": "graph LR; A", "colour": "none"}, "colour"),
        ({"diagram_source": "graph LR; A", "color_mode": "cmyk"}, "color_mode"),
    ],
)
async def test_invalid_payload_never_reaches_handler(arguments, field):
    handler = Recorder()
    registry = ToolRegistry()
    registry.register(_definition(), handler)

    with pytest.raises(SchemaValidationError) as exc:
        await registry.call("render-text-art", arguments)

    assert handler.requests == []
    assert [p["field"] for p in exc.value.problems] == [field]
    assert field in exc.value.user_message
    assert exc.value.to_error().code == "validation_error"


@pytest.mark.asyncio
async def test_tool_run_converts_validation_failure_to_tool_error():
    handler = Recorder()
    tool = ToolRegistry().register(_definition(), handler)

    with pytest.raises(ToolError, match="diagram_source"):
        await tool.run({"diagram_source": ""})
    assert handler.requests == []


@pytest.mark.asyncio
async def test_tool_run_converts_domain_errors_to_tool_error():
    tool = ToolRegistry().register(_definition(), Recorder(RenderEngineError("Error rendering ASCII: bad")))
    with pytest.raises(ToolError, match="Error rendering ASCII: bad"):
        await tool.run({"diagram_source": "graph LR; A"})


@pytest.mark.asyncio
async def test_tool_run_hides_unexpected_errors():
    tool = ToolRegistry().register(_definition(), Recorder(RuntimeError("secret internals")))
    with pytest.raises(ToolError) as exc:
        await tool.run({"diagram_source": "graph LR; A"})
    assert "secret internals" not in str(exc.value)


def test_get_unknown_tool():
    with pytest.raises(KeyError):
        ToolRegistry().get("missing")
