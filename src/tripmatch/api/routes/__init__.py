"""Route group exports."""

from . import drivers, health, routes, trips

__all__ = ["drivers", "health", "routes", "trips"]
