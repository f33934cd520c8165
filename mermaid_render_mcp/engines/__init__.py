from .base_engine import DiagramEngine
from .factory import create_engine
from .node_bridge import NodeBridgeEngine

__all__ = ["DiagramEngine", "NodeBridgeEngine", "create_engine"]
