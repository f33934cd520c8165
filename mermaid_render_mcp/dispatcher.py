from __future__ import annotations

import asyncio
from collections.abc import Mapping

from loguru import logger

from .engines import DiagramEngine
from .exceptions import DiagramToolError
from .schema import (
    Error,
    Preset,
    RenderResult,
    TextArtRenderRequest,
    VectorRenderRequest,
)
from .shard import constants as C
from .shard.presets import PRESETS
from .utils.options import resolve_options, summarize_options
from .utils.output import inline_artifact, persist_artifact


def _engine_failure(prefix: str, e: Exception) -> Error:
    message = e.user_message if isinstance(e, DiagramToolError) else str(e) or type(e).__name__
    return Error(code=C.ERROR_CODE_RENDER, message=f"{prefix}: {message}")


class RenderDispatcher:
    """Runs one render or listing per call and shapes the result.

    Every call is independent: validate-resolve-render-write with no retry
    and no state carried between calls. Failures come back as a failed
    ``RenderResult``; nothing raised by the engine escapes.
    """

    def __init__(
        self,
        engine: DiagramEngine,
        presets: Mapping[str, Preset] = PRESETS,
        scratch_dir: str | None = None,
    ) -> None:
        self.engine = engine
        self.presets = presets
        self.scratch_dir = scratch_dir

    async def render_vector(self, req: VectorRenderRequest) -> RenderResult:
        overrides = req.overrides()
        try:
            options = resolve_options(req.preset_name, overrides, self.presets)
        except DiagramToolError as e:
            return RenderResult.failure(e.to_error())

        try:
            svg = await self.engine.render_vector(req.diagram_source, options)
        except Exception as e:
            logger.warning(f"SVG render failed: {e}")
            return RenderResult.failure(_engine_failure("Error rendering SVG", e))

        try:
            output = await asyncio.to_thread(persist_artifact, svg, req.output_path, self.scratch_dir)
        except DiagramToolError as e:
            logger.error(f"Failed to persist SVG: {e.user_message}")
            return RenderResult.failure(e.to_error())

        logger.debug(f"SVG written to {output.path} ({output.size_bytes} bytes)")
        return RenderResult.success(output, output.size_bytes, **summarize_options(options, overrides))

    async def render_text_art(self, req: TextArtRenderRequest) -> RenderResult:
        try:
            text = await self.engine.render_text_art(
                req.diagram_source,
                use_ascii_only=req.use_ascii_only,
                color_mode=req.color_mode,
            )
        except Exception as e:
            logger.warning(f"ASCII render failed: {e}")
            return RenderResult.failure(_engine_failure("Error rendering ASCII", e))

        return RenderResult.success(
            inline_artifact(text),
            len(text.encode("utf-8")),
            color_mode=req.color_mode.value,
            use_ascii_only=req.use_ascii_only,
        )

    def list_presets(self) -> list[Preset]:
        """Every known preset in table order."""
        return list(self.presets.values())


__all__ = ["RenderDispatcher"]
