"""
Inline Editable - Content Module

The content provider: tiered lookup, locale fallback and write invalidation.
"""

from .factory import create_content_provider
from .local_store import LocalBlockStore
from .provider import ContentProvider

__all__ = [
    "ContentProvider",
    "LocalBlockStore",
    "create_content_provider",
]
