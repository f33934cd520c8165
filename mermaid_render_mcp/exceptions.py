from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .schema import Error
from .shard import constants as C


class DiagramToolError(Exception):
    """Base class for failures surfaced to MCP callers.

    ``user_message`` is safe to show to the agent verbatim; ``code`` is one of
    the stable error codes in ``shard.constants``.
    """

    code: str = C.ERROR_CODE_RENDER

    def __init__(self, user_message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.details = details

    def to_error(self) -> Error:
        return Error(code=self.code, message=self.user_message, details=self.details)

    @classmethod
    def from_error(cls, error: Error) -> DiagramToolError:
        exc = DiagramToolError(error.message, details=error.details)
        exc.code = error.code
        return exc


class SchemaValidationError(DiagramToolError):
    """Raised when tool arguments fail the bound input schema."""

    code = C.ERROR_CODE_VALIDATION

    def __init__(self, tool_name: str, problems: list[dict[str, str]]) -> None:
        self.tool_name = tool_name
        self.problems = problems
        lines = [f"- {p['field']}: {p['message']}" for p in problems]
        message = f"Invalid arguments for '{tool_name}':\n" + "\n".join(lines)
        super().__init__(message, details={"errors": problems})


class UnknownPresetError(DiagramToolError):
    """Raised when a preset name is not in the preset table."""

    code = C.ERROR_CODE_UNKNOWN_PRESET

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(
            f"Error: Unknown theme '{name}'. Available themes: {', '.join(self.available)}",
            details={"available": self.available},
        )


class RenderEngineError(DiagramToolError):
    """Raised when the rendering engine rejects the source or options."""

    code = C.ERROR_CODE_RENDER


class OutputWriteError(DiagramToolError):
    """Raised when a rendered artifact cannot be persisted."""

    code = C.ERROR_CODE_OUTPUT_WRITE

    def __init__(self, path: str, reason: Exception | str) -> None:
        self.path = path
        super().__init__(f"Error writing SVG to {path}: {reason}", details={"path": path})


class DuplicateToolError(ValueError):
    """Raised at startup when two tools are registered under one name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' is already registered")


__all__ = [
    "DiagramToolError",
    "SchemaValidationError",
    "UnknownPresetError",
    "RenderEngineError",
    "OutputWriteError",
    "DuplicateToolError",
]
