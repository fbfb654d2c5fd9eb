"""
Station Simulation

A deterministic, headless simulation of a crewed space station.
Inhabitants walk a tile grid, get hungry and thirsty, and go looking for food.

Architecture: StationSimulation is the source of truth. Renderers and UIs are consumers.
"""

__version__ = "0.1.0"
