from __future__ import annotations

import asyncio
import os

import pytest

from mermaid_render_mcp.dispatcher import RenderDispatcher
from mermaid_render_mcp.schema import InlineOutput, PersistedOutput, TextArtRenderRequest, VectorRenderRequest
from mermaid_render_mcp.shard.enums import ColorMode
from mermaid_render_mcp.shard.presets import PRESETS


@pytest.fixture
def dispatcher(fake_engine, tmp_path) -> RenderDispatcher:
    return RenderDispatcher(fake_engine, scratch_dir=str(tmp_path))


class TestRenderVector:
    @pytest.mark.asyncio
    async def test_success_reports_size_of_written_file(self, dispatcher, tmp_path):
        result = await dispatcher.render_vector(VectorRenderRequest(diagram_source="graph TD; A --> B"))

        assert result.ok
        assert isinstance(result.output, PersistedOutput)
        assert os.path.dirname(result.output.path) == str(tmp_path)
        assert result.byte_length == result.output.size_bytes == os.path.getsize(result.output.path)
        assert result.summary == {"preset": "default", "overrides": {}}

    @pytest.mark.asyncio
    async def test_explicit_output_path(self, dispatcher, tmp_path):
        target = tmp_path / "nested" / "out.svg"
        result = await dispatcher.render_vector(VectorRenderRequest(diagram_source="graph TD; A", output_path=str(target)))
        assert result.ok
        assert result.output.path == str(target)
        assert target.read_bytes().startswith(b"<svg")

    @pytest.mark.asyncio
    async def test_engine_receives_merged_options(self, dispatcher, fake_engine):
        req = VectorRenderRequest(diagram_source="graph TD; A", preset_name="dracula", background="#000000", font="Inter")
        result = await dispatcher.render_vector(req)

        assert result.ok
        source, options = fake_engine.vector_calls[0]
        assert source == "graph TD; A"
        assert options.background == "#000000"
        assert options.foreground == PRESETS["dracula"].foreground
        assert options.font == "Inter"
        assert result.summary == {"preset": "dracula", "overrides": {"background": "#000000", "font": "Inter"}}

    @pytest.mark.asyncio
    async def test_unknown_preset_never_reaches_engine(self, dispatcher, fake_engine):
        result = await dispatcher.render_vector(VectorRenderRequest(diagram_source="graph TD; A", preset_name="nope"))

        assert not result.ok
        assert result.error.code == "unknown_preset"
        assert "dracula" in result.error.message
        assert fake_engine.vector_calls == []

    @pytest.mark.asyncio
    async def test_engine_error_becomes_failure(self, dispatcher, fake_engine, tmp_path):
        fake_engine.error = "Parse error on line 1"
        result = await dispatcher.render_vector(VectorRenderRequest(diagram_source="graph ???"))

        assert not result.ok
        assert result.error.code == "render_error"
        assert result.error.message == "Error rendering SVG: Parse error on line 1"
        assert os.listdir(tmp_path) == []

    @pytest.mark.asyncio
    async def test_write_error_becomes_failure(self, dispatcher, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        result = await dispatcher.render_vector(
            VectorRenderRequest(diagram_source="graph TD; A", output_path=str(blocker / "out.svg"))
        )

        assert not result.ok
        assert result.error.code == "output_write_error"
        assert str(blocker / "out.svg") in result.error.message

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_collide(self, dispatcher):
        sources = [f"graph TD; N{i} --> M{i}" for i in range(8)]
        results = await asyncio.gather(
            *(dispatcher.render_vector(VectorRenderRequest(diagram_source=s)) for s in sources)
        )

        paths = [r.output.path for r in results]
        assert len(set(paths)) == len(sources)
        for source, result in zip(sources, results):
            with open(result.output.path, "rb") as f:
                content = f.read()
            assert source.encode() in content
            assert len(content) == result.byte_length
            for other in sources:
                if other != source:
                    assert other.encode() not in content


class TestRenderTextArt:
    @pytest.mark.asyncio
    async def test_returns_inline_text(self, dispatcher, fake_engine):
        req = TextArtRenderRequest(diagram_source="graph LR; A --> B --> C", color_mode=ColorMode.NONE)
        result = await dispatcher.render_text_art(req)

        assert result.ok
        assert isinstance(result.output, InlineOutput)
        assert result.output.text == fake_engine.text
        assert result.byte_length == len(fake_engine.text.encode("utf-8"))
        assert fake_engine.text_calls == [("graph LR; A --> B --> C", False, ColorMode.NONE)]

    @pytest.mark.asyncio
    async def test_passes_flags_through(self, dispatcher, fake_engine):
        req = TextArtRenderRequest(diagram_source="graph LR; A", use_ascii_only=True, color_mode="truecolor")
        await dispatcher.render_text_art(req)
        assert fake_engine.text_calls == [("graph LR; A", True, ColorMode.TRUECOLOR)]

    @pytest.mark.asyncio
    async def test_engine_error_becomes_failure(self, dispatcher, fake_engine):
        fake_engine.error = "Unsupported diagram type"
        result = await dispatcher.render_text_art(TextArtRenderRequest(diagram_source="pie"))

        assert not result.ok
        assert result.error.message == "Error rendering ASCII: Unsupported diagram type"


def test_list_presets_in_table_order(dispatcher):
    presets = dispatcher.list_presets()
    assert [p.name for p in presets] == list(PRESETS)
    assert len({p.name for p in presets}) == len(presets)
