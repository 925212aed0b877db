"""Route group exports."""

from . import churches, health

__all__ = ["churches", "health"]
