"""
Inline Editable - Persistence Layer Interface

The durable store (L3) behind the content provider. Concrete drivers hold the
authoritative copy of every (namespace, name, locale) -> content row.
"""

from abc import ABC, abstractmethod


class PersistenceLayer(ABC):
    """Abstract base class for durable content stores."""

    @abstractmethod
    async def get_namespace_content(self, namespace: str, locale: str) -> dict[str, str]:
        """
        Read every (name, content) pair stored for a namespace and locale.

        Args:
            namespace: Namespace of the block
            locale: Locale of the block

        Returns:
            Mapping of name to content, empty if nothing is stored

        Raises:
            PersistenceError: If the store cannot be read
        """
        pass

    @abstractmethod
    async def save_content(self, namespace: str, name: str, locale: str, content: str) -> bool:
        """
        Insert the row for (namespace, name, locale) or overwrite its content.

        Concurrent upserts on the same key resolve last-writer-wins.

        Returns:
            True once the row is durably written

        Raises:
            PersistenceError: If the write fails
        """
        pass

    async def close(self) -> None:
        """Release connections held by the driver."""
        return None
