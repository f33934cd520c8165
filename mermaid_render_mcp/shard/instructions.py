from __future__ import annotations

from .enums import ToolName
from .presets import preset_names

# Tool descriptions advertised over MCP. Keep the Args section in sync with the
# request models in schema.py.
TOOL_DESCRIPTIONS: dict[str, str] = {
    ToolName.RENDER_VECTOR.value: f"""Render Mermaid diagram code into an SVG file.

Supports flowchart, state, sequence, class, ER, and XY chart diagrams.
Supports {len(preset_names())} built-in presets (themes) and custom color overrides.

Args:
  - diagram_source (string, required): Mermaid diagram source code
  - preset_name (string, optional): Built-in preset name ({", ".join(preset_names())})
  - output_path (string, optional): File path to save the SVG. Defaults to a temp file
  - background (string, optional): Background color hex, overrides the preset
  - foreground (string, optional): Foreground color hex, overrides the preset
  - accent (string, optional): Accent color for arrows/highlights
  - transparent (boolean, optional): Transparent background
  - font (string, optional): Font family

Returns:
  The absolute path of the saved SVG, the active preset, and its size in bytes.

Examples:
  - Flowchart: diagram_source="graph TD; A[Start] --> B{{Decision}} --> C[End]"
  - Sequence: diagram_source="sequenceDiagram; Alice->>Bob: Hello"
  - With preset: diagram_source="graph LR; A --> B", preset_name="dracula\"""",
    ToolName.RENDER_TEXT_ART.value: """Render Mermaid diagram code into ASCII/Unicode text art for terminal display.

Supports flowchart, state, sequence, class, ER, and XY chart diagrams.
Uses Unicode box-drawing characters by default.

Args:
  - diagram_source (string, required): Mermaid diagram source code
  - use_ascii_only (boolean, optional): Use pure ASCII chars instead of Unicode (default: false)
  - color_mode (string, optional): 'none' (default), 'ansi16', 'ansi256', 'truecolor', 'html'

Returns:
  The rendered text diagram.

Examples:
  - Simple flow: diagram_source="graph LR; A --> B --> C"
  - State diagram: diagram_source="stateDiagram-v2; [*] --> Active; Active --> [*]"
  - No colors: diagram_source="graph TD; A --> B", color_mode="none\"""",
    ToolName.LIST_PRESETS.value: """List all built-in presets (themes) for Mermaid diagram rendering.

Returns preset names with their color palettes (bg, fg, accent, ...).
Use a preset name as render-vector's 'preset_name' parameter.""",
}

TOOL_TITLES: dict[str, str] = {
    ToolName.RENDER_VECTOR.value: "Render Mermaid to SVG",
    ToolName.RENDER_TEXT_ART.value: "Render Mermaid to ASCII",
    ToolName.LIST_PRESETS.value: "List Mermaid Themes",
}


SERVER_INSTRUCTIONS: str = (
    "Mermaid Render MCP Server - Agent Instructions.\n"
    "Role: This server renders Mermaid diagram source. Tools: render-vector (SVG file on disk), "
    "render-text-art (inline ASCII/Unicode text) and list-presets (built-in color presets).\n\n"
    "Workflow (short):\n"
    "1) For terminal or chat output call render-text-art; the diagram comes back inline.\n"
    "2) For an image call render-vector; it writes an SVG and returns its absolute path.\n"
    "3) Call list-presets to discover preset names before passing preset_name.\n\n"
    "Rules:\n"
    "- diagram_source must be non-empty Mermaid code without ``` fences.\n"
    "- Explicit background/foreground/accent/font/transparent values override the preset.\n"
    "- Unknown arguments are rejected.\n\n"
    "Failures are returned as MCP tool errors with a message describing the cause "
    "(invalid arguments, unknown preset with the valid names, engine syntax errors, or write errors)."
)


__all__ = ["TOOL_DESCRIPTIONS", "TOOL_TITLES", "SERVER_INSTRUCTIONS"]
