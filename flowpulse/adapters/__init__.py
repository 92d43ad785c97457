"""Adapters layer - Concrete implementations of the ports.

Subpackages:
- repair: Coordinate validation and sign repair
- rendering: Folium flow maps
- source: Table text acquisition
"""
