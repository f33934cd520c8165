"""Project constants shared by the dispatcher, output channel and engine adapter.

Engine-facing key names live here as well so the Python field names used in
the public schema can stay descriptive.
"""

from __future__ import annotations

from typing import Final

from .enums import ColorMode

# ----------------------------- Server identity ------------------------------ #

SERVER_NAME: Final[str] = "mermaid-render-mcp"

# ------------------------------ Render defaults ----------------------------- #

DEFAULT_COLOR_MODE: Final[ColorMode] = ColorMode.NONE

# Label used in reports when no preset was requested.
DEFAULT_PRESET_LABEL: Final[str] = "default"

# Prefix and suffix for synthesised output files in the scratch directory.
OUTPUT_FILE_PREFIX: Final[str] = "mermaid"
OUTPUT_FILE_SUFFIX: Final[str] = ".svg"

# Accepts #RGB, #RGBA, #RRGGBB and #RRGGBBAA.
HEX_COLOR_PATTERN: Final[str] = r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$"

# Order in which colour fields are reported by list-presets.
PRESET_COLOR_FIELDS: Final[tuple[str, ...]] = (
    "background",
    "foreground",
    "accent",
    "muted",
    "surface",
    "border",
    "line",
)

# Python field name -> engine option key.
ENGINE_OPTION_KEYS: Final[dict[str, str]] = {
    "background": "bg",
    "foreground": "fg",
    "accent": "accent",
    "muted": "muted",
    "surface": "surface",
    "border": "border",
    "line": "line",
    "transparent": "transparent",
    "font": "font",
}

# ------------------------------- Error codes -------------------------------- #

ERROR_CODE_VALIDATION: Final[str] = "validation_error"
ERROR_CODE_UNKNOWN_PRESET: Final[str] = "unknown_preset"
ERROR_CODE_RENDER: Final[str] = "render_error"
ERROR_CODE_OUTPUT_WRITE: Final[str] = "output_write_error"
