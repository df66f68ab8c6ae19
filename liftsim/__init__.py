"""Real-time simulation of elevator groups, passengers and waiting-time statistics."""

__version__ = "5.5.1"

__all__ = [
    "building",
    "charts",
    "elevator",
    "floor",
    "passenger",
    "shaft",
    "statistics",
]