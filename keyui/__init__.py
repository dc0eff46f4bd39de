"""Terminal key decoding, user key mappings and an interactive driver."""

__version__ = "0.1.0"

__all__ = ["keys", "tree", "keycodes", "mapping", "context", "terminal", "driver"]