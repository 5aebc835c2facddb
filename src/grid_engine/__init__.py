"""Grid buffer model and redraw protocol translator for editor front ends."""

__all__ = [
    "adapters",
    "applier",
    "config",
    "grid",
    "protocol",
    "runtime",
    "session",
]

__version__ = "0.1.0"
