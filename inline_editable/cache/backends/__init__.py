"""
Inline Editable - Cache Backends

Exports available cache backend implementations.

The Redis backend is imported lazily via factory.py.
"""

from .memory import MemoryCacheBackend

__all__ = [
    "MemoryCacheBackend",
]
