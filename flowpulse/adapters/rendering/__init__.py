"""Rendering adapters - Implementations of FlowMapRendererPort.

Available implementations:
- FoliumFlowMapRenderer: Folium-based interactive flow map rendering
"""

from .folium_adapter import FoliumFlowMapRenderer

__all__ = ["FoliumFlowMapRenderer"]
