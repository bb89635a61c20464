"""Strict JSON parsing into Python values, with precise error positions."""

__version__ = "1.0.0"
__all__ = ["deserializer", "errors", "numbers", "skipping", "source"]