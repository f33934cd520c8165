from __future__ import annotations

from ..settings import Settings, get_settings
from .base_engine import DiagramEngine
from .node_bridge import NodeBridgeEngine


def create_engine(settings: Settings | None = None) -> DiagramEngine:
    """Build the rendering engine configured by ``settings``."""
    settings = settings or get_settings()
    return NodeBridgeEngine(
        node_binary=settings.node_binary,
        engine_module=settings.engine_module,
        workdir=settings.node_workdir,
    )


__all__ = ["create_engine"]
