from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .shard import constants as C
from .shard.enums import ColorMode, OutputKind, ToolName

HexColor = Annotated[str, Field(pattern=C.HEX_COLOR_PATTERN)]

# ------------------------------ Error handling ------------------------------ #


class Error(BaseModel):
    """Normalized error provided on failures.

    Messages are short and actionable; codes are stable so clients can branch
    on them.
    """

    code: str = Field(description="Stable machine-readable error code, e.g. 'unknown_preset'.")
    message: str = Field(description="Human-readable error message with remediation tips when possible.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional debug details; treat as best-effort and unstable for parsing.",
    )


# ---------------------------------- Presets --------------------------------- #


class Preset(BaseModel):
    """A named palette. Only the colour fields the palette defines are set."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Preset name accepted by render-vector's 'preset_name'.")
    background: str | None = None
    foreground: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None
    line: str | None = None

    def colors(self) -> dict[str, str]:
        """Defined colour fields in report order, keyed by engine name."""
        out: dict[str, str] = {}
        for field in C.PRESET_COLOR_FIELDS:
            value = getattr(self, field)
            if value is not None:
                out[C.ENGINE_OPTION_KEYS[field]] = value
        return out


class PresetListResponse(BaseModel):
    """Structured output for list-presets."""

    ok: bool = Field(default=True)
    presets: list[dict[str, str]] = Field(default_factory=list, description="Each preset's name plus its defined colour fields.")


# ------------------------------ Render requests ----------------------------- #


class _ToolRequest(BaseModel):
    # Unknown fields are a validation failure; requests never change after validation.
    model_config = ConfigDict(extra="forbid", frozen=True)


DiagramSource = Annotated[
    str,
    Field(
        min_length=1,
        description="Mermaid diagram source code (e.g., 'graph TD; A --> B').",
    ),
]


class VectorRenderRequest(_ToolRequest):
    """Render Mermaid source to an SVG file."""

    diagram_source: DiagramSource
    preset_name: str | None = Field(default=None, description="Built-in preset (theme) name. See list-presets.")
    background: HexColor | None = Field(default=None, description="Background color hex (e.g., '#FFFFFF'). Overrides preset.")
    foreground: HexColor | None = Field(default=None, description="Foreground/text color hex (e.g., '#27272A'). Overrides preset.")
    accent: HexColor | None = Field(default=None, description="Accent color hex for arrows and highlights. Overrides preset.")
    transparent: bool | None = Field(default=None, description="Render with transparent background (default: false).")
    font: str | None = Field(default=None, min_length=1, description="Font family (engine default: 'Inter').")
    output_path: str | None = Field(
        default=None,
        min_length=1,
        description="File path to save the SVG; resolved to an absolute path. If omitted, saves to a temp file.",
    )

    def overrides(self) -> dict[str, Any]:
        """Explicit visual overrides present in this request."""
        fields = ("background", "foreground", "accent", "transparent", "font")
        return {f: getattr(self, f) for f in fields if getattr(self, f) is not None}


class TextArtRenderRequest(_ToolRequest):
    """Render Mermaid source to ASCII/Unicode text art."""

    diagram_source: DiagramSource
    use_ascii_only: bool = Field(default=False, description="Use pure ASCII characters instead of Unicode box-drawing.")
    color_mode: ColorMode = Field(
        default=C.DEFAULT_COLOR_MODE,
        description="Color output mode: 'none', 'ansi16', 'ansi256', 'truecolor', or 'html'.",
    )


class ListPresetsRequest(_ToolRequest):
    """list-presets takes no arguments."""


# ------------------------------ Resolved options ---------------------------- #


class ResolvedOptions(BaseModel):
    """Preset values merged with explicit overrides.

    Every field is optional; an unset field defers to the engine's default.
    """

    model_config = ConfigDict(frozen=True)

    preset_name: str | None = None
    background: str | None = None
    foreground: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None
    line: str | None = None
    transparent: bool | None = None
    font: str | None = None

    def to_engine_options(self) -> dict[str, Any]:
        """Options keyed the way the engine expects them, unset fields omitted."""
        return {
            key: getattr(self, field)
            for field, key in C.ENGINE_OPTION_KEYS.items()
            if getattr(self, field) is not None
        }


# ------------------------------- Render results ----------------------------- #


class InlineOutput(BaseModel):
    kind: Literal["inline"] = OutputKind.INLINE.value
    text: str


class PersistedOutput(BaseModel):
    kind: Literal["path"] = OutputKind.PATH.value
    path: str = Field(description="Absolute filesystem path of the written artifact.")
    size_bytes: int = Field(ge=0)


OutputTarget = Annotated[InlineOutput | PersistedOutput, Field(discriminator="kind")]


class RenderResult(BaseModel):
    """Outcome of one dispatch: success with an output, or failure with an error."""

    ok: bool
    output: OutputTarget | None = None
    byte_length: int | None = Field(default=None, ge=0)
    summary: dict[str, Any] = Field(default_factory=dict, description="Preset/override summary for reports.")
    error: Error | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> RenderResult:
        if self.ok and (self.output is None or self.error is not None):
            raise ValueError("successful RenderResult needs an output and no error")
        if not self.ok and (self.error is None or self.output is not None):
            raise ValueError("failed RenderResult needs an error and no output")
        return self

    @classmethod
    def success(cls, output: InlineOutput | PersistedOutput, byte_length: int, **summary: Any) -> RenderResult:
        return cls(ok=True, output=output, byte_length=byte_length, summary=summary)

    @classmethod
    def failure(cls, error: Error) -> RenderResult:
        return cls(ok=False, error=error)

    def persisted_output(self) -> PersistedOutput:
        if not isinstance(self.output, PersistedOutput):
            raise ValueError(f"expected a persisted output, got {self._describe()}")
        return self.output

    def inline_output(self) -> InlineOutput:
        if not isinstance(self.output, InlineOutput):
            raise ValueError(f"expected an inline output, got {self._describe()}")
        return self.output

    def failure_error(self) -> Error:
        if self.error is None:
            raise ValueError("RenderResult succeeded; there is no error")
        return self.error

    def _describe(self) -> str:
        return "a failure" if self.output is None else f"{self.output.kind!r} output"


def tool_input_schemas() -> Mapping[str, dict[str, Any]]:
    """Return JSON Schemas for tool input payloads keyed by tool name."""

    return {
        ToolName.RENDER_VECTOR.value: VectorRenderRequest.model_json_schema(),
        ToolName.RENDER_TEXT_ART.value: TextArtRenderRequest.model_json_schema(),
        ToolName.LIST_PRESETS.value: ListPresetsRequest.model_json_schema(),
    }


__all__ = [
    "Error",
    "Preset",
    "PresetListResponse",
    "VectorRenderRequest",
    "TextArtRenderRequest",
    "ListPresetsRequest",
    "ResolvedOptions",
    "InlineOutput",
    "PersistedOutput",
    "OutputTarget",
    "RenderResult",
    "tool_input_schemas",
]
