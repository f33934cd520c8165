"""Tool registry: stable names, strict input schemas and routing.

Each capability is described by a frozen ``ToolDefinition`` and bound to an
async handler. Arguments are validated against the definition's request model
before the handler runs, so malformed calls never reach the dispatcher.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult
from loguru import logger
from mcp.types import ToolAnnotations
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import DiagramToolError, DuplicateToolError, SchemaValidationError

ToolHandler = Callable[[Any], Awaitable[ToolResult]]


class ToolDefinition(BaseModel):
    """Name, schema and documentation for one capability. Immutable."""

    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    description: str
    request_model: type[BaseModel]
    annotations: ToolAnnotations

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.request_model.model_json_schema()

    def validate_arguments(self, arguments: Mapping[str, Any] | None) -> BaseModel:
        """Validate raw call arguments against the request model.

        Raises:
            SchemaValidationError: with one entry per offending field.
        """
        try:
            return self.request_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            problems = [
                {
                    "field": ".".join(str(p) for p in err["loc"]) or "(root)",
                    "message": err["msg"],
                    "type": err["type"],
                }
                for err in e.errors()
            ]
            raise SchemaValidationError(self.name, problems) from e


class RegisteredTool(Tool):
    """FastMCP tool backed by a ``ToolDefinition`` and a handler."""

    definition: ToolDefinition = Field(exclude=True)
    handler: ToolHandler = Field(exclude=True)

    @classmethod
    def from_definition(cls, definition: ToolDefinition, handler: ToolHandler) -> RegisteredTool:
        return cls(
            name=definition.name,
            title=definition.title,
            description=definition.description,
            parameters=definition.input_schema,
            annotations=definition.annotations,
            definition=definition,
            handler=handler,
        )

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        try:
            request = self.definition.validate_arguments(arguments)
            return await self.handler(request)
        except DiagramToolError as e:
            logger.warning(f"{self.name} failed ({e.code}): {e.user_message}")
            raise ToolError(e.user_message) from e
        except ToolError:
            raise
        except Exception as e:
            # Unexpected errors are logged with traceback; callers get a generic message.
            logger.exception(f"Unexpected error in {self.name}: {type(e).__name__}: {e}")
            raise ToolError("An unexpected error occurred. Please try again.") from e


class ToolRegistry:
    """Holds every registered tool for the lifetime of the process."""

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, definition: ToolDefinition, handler: ToolHandler) -> RegisteredTool:
        """Bind ``handler`` to ``definition``.

        Raises:
            DuplicateToolError: a tool with the same name already exists.
        """
        if definition.name in self._tools:
            raise DuplicateToolError(definition.name)
        tool = RegisteredTool.from_definition(definition, handler)
        self._tools[definition.name] = tool
        logger.debug(f"Registered tool {definition.name}")
        return tool

    def get(self, name: str) -> RegisteredTool:
        try:
            return self._tools[name]
        except KeyError:
            raise KeyError(f"Unknown tool '{name}'. Registered: {', '.join(self._tools)}") from None

    def names(self) -> list[str]:
        return list(self._tools)

    def __iter__(self) -> Iterator[RegisteredTool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    async def call(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """Validate ``arguments`` for ``name`` and run its handler.

        Failures propagate as ``DiagramToolError`` subclasses; ``SchemaValidationError``
        is raised before the handler is invoked.
        """
        tool = self.get(name)
        request = tool.definition.validate_arguments(arguments)
        return await tool.handler(request)

    def bind(self, app: FastMCP) -> None:
        """Add every registered tool to ``app``."""
        for tool in self:
            app.add_tool(tool)


__all__ = ["ToolDefinition", "RegisteredTool", "ToolRegistry", "ToolHandler"]
