from __future__ import annotations

import asyncio
import json
from typing import Any

from loguru import logger

from ..exceptions import RenderEngineError
from ..schema import ResolvedOptions
from ..settings import get_settings
from ..shard.enums import ColorMode, RenderMode
from .base_engine import DiagramEngine

settings = get_settings()

# Reads one JSON request from stdin, calls the engine module, writes one JSON
# reply to stdout. Engine failures are reported in the reply, not via exit code.
BRIDGE_SCRIPT = r"""
const chunks = [];
process.stdin.on("data", (chunk) => chunks.push(chunk));
process.stdin.on("end", async () => {
  let reply;
  try {
    const req = JSON.parse(Buffer.concat(chunks).toString("utf8"));
    const engine = await import(req.module);
    const output = req.mode === "svg"
      ? await engine.renderMermaidSVG(req.source, req.options)
      : await engine.renderMermaidASCII(req.source, req.options);
    reply = { ok: true, output: String(output) };
  } catch (error) {
    reply = { ok: false, error: error instanceof Error ? error.message : String(error) };
  }
  process.stdout.write(JSON.stringify(reply));
});
"""


class NodeBridgeEngine(DiagramEngine):
    """Runs the ``beautiful-mermaid`` renderer in a Node.js subprocess.

    Each render spawns one ``node`` process; nothing is shared between calls.
    """

    name: str = "beautiful-mermaid"
    node_binary: str = settings.node_binary
    engine_module: str = settings.engine_module
    workdir: str | None = settings.node_workdir

    async def render_vector(self, source: str, options: ResolvedOptions) -> bytes:
        svg = await self._call(RenderMode.SVG, source, options.to_engine_options())
        return svg.encode("utf-8")

    async def render_text_art(self, source: str, *, use_ascii_only: bool, color_mode: ColorMode) -> str:
        return await self._call(
            RenderMode.ASCII,
            source,
            {"useAscii": use_ascii_only, "colorMode": ColorMode(color_mode).value},
        )

    async def _call(self, mode: RenderMode, source: str, options: dict[str, Any]) -> str:
        payload = json.dumps({"module": self.engine_module, "mode": mode.value, "source": source, "options": options})
        logger.debug(f"Invoking {self.name} ({mode.value}) via {self.node_binary}")
        try:
            proc = await asyncio.create_subprocess_exec(
                self.node_binary,
                "-e",
                BRIDGE_SCRIPT,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.workdir,
            )
        except FileNotFoundError as e:
            raise RenderEngineError(
                f"Node.js executable '{self.node_binary}' not found. Install Node.js and `npm install {self.engine_module}`."
            ) from e

        stdout, stderr = await proc.communicate(payload.encode("utf-8"))
        if proc.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip() or f"node exited with status {proc.returncode}"
            raise RenderEngineError(message)

        try:
            reply = json.loads(stdout.decode("utf-8"))
        except json.JSONDecodeError as e:
            raise RenderEngineError(f"Malformed reply from rendering engine: {e}") from e

        if not reply.get("ok"):
            raise RenderEngineError(str(reply.get("error") or "rendering engine reported an unknown error"))
        return reply["output"]


__all__ = ["NodeBridgeEngine", "BRIDGE_SCRIPT"]
