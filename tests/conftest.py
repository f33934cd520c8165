from __future__ import annotations

import os
import sys

import pytest

# Add repository root to sys.path for `import mermaid_render_mcp.*` in tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from mermaid_render_mcp.engines import DiagramEngine  # noqa: E402
from mermaid_render_mcp.schema import ResolvedOptions  # noqa: E402
from mermaid_render_mcp.shard.enums import ColorMode  # noqa: E402

SAMPLE_SVG = '<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"><rect/></svg>'
SAMPLE_ASCII = "┌───┐     ┌───┐     ┌───┐\n│ A ├────►│ B ├────►│ C │\n└───┘     └───┘     └───┘"


class FakeEngine(DiagramEngine):
    """In-process stand-in for the Node renderer; records every call."""

    name: str = "fake"
    svg: str = SAMPLE_SVG
    text: str = SAMPLE_ASCII
    error: str | None = None
    vector_calls: list[tuple[str, ResolvedOptions]] = []
    text_calls: list[tuple[str, bool, ColorMode]] = []

    async def render_vector(self, source: str, options: ResolvedOptions) -> bytes:
        self.vector_calls.append((source, options))
        if self.error:
            raise ValueError(self.error)
        # Tag the artifact with its source so concurrent writes can be told apart.
        return self.svg.replace("<rect/>", f"<!-- {source} --><rect/>").encode("utf-8")

    async def render_text_art(self, source: str, *, use_ascii_only: bool, color_mode: ColorMode) -> str:
        self.text_calls.append((source, use_ascii_only, color_mode))
        if self.error:
            raise ValueError(self.error)
        return self.text


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()
