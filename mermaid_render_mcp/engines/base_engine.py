from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from ..schema import ResolvedOptions
from ..shard.enums import ColorMode


class DiagramEngine(ABC, BaseModel):
    """Abstract base for diagram rendering engines.

    Implementations raise on any rendering failure; the dispatcher turns the
    exception into an error response.
    """

    name: str

    @abstractmethod
    async def render_vector(self, source: str, options: ResolvedOptions) -> bytes:
        """Render Mermaid ``source`` to serialized SVG bytes."""
        raise NotImplementedError

    @abstractmethod
    async def render_text_art(self, source: str, *, use_ascii_only: bool, color_mode: ColorMode) -> str:
        """Render Mermaid ``source`` to ASCII/Unicode text art."""
        raise NotImplementedError
