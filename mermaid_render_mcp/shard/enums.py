from __future__ import annotations

from enum import StrEnum


class ToolName(StrEnum):
    """Stable tool names advertised over MCP. Never rename a member's value."""

    RENDER_VECTOR = "render-vector"
    RENDER_TEXT_ART = "render-text-art"
    LIST_PRESETS = "list-presets"


class ColorMode(StrEnum):
    """Colour output modes understood by the text-art renderer."""

    NONE = "none"
    ANSI16 = "ansi16"
    ANSI256 = "ansi256"
    TRUECOLOR = "truecolor"
    HTML = "html"


class RenderMode(StrEnum):
    """Engine entry points; values are sent to the Node bridge as-is."""

    SVG = "svg"
    ASCII = "ascii"


class OutputKind(StrEnum):
    """Where an artifact ends up: embedded in the response or on disk."""

    INLINE = "inline"
    PATH = "path"


__all__ = ["ToolName", "ColorMode", "RenderMode", "OutputKind"]
