"""Abstract base class for store location sources."""

from abc import ABC, abstractmethod

from store_delivery.models import StoreAddress


class StoreRepository(ABC):
    """Read-only access to store records that all store sources must implement."""

    @abstractmethod
    def get_store(self, store_id: str) -> StoreAddress | None:
        """Look up a single store.

        Args:
            store_id: Store identifier.

        Returns:
            The store, or None if no store has that id.
        """

    @abstractmethod
    def list_stores(self) -> list[StoreAddress]:
        """Return every store, active or not."""

    def list_active_stores(self) -> list[StoreAddress]:
        return [s for s in self.list_stores() if s.is_active]

    def list_pickup_stores(self) -> list[StoreAddress]:
        """Return active stores that offer in-store pickup."""
        return [s for s in self.list_active_stores() if s.allows_pickup]

    def list_delivery_stores(self) -> list[StoreAddress]:
        """Return active stores with delivery enabled."""
        return [
            s for s in self.list_active_stores()
            if s.delivery_settings.enable_delivery
        ]
