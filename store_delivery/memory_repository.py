"""Store repository backed by an in-memory list, optionally loaded from JSON."""

import json

from store_delivery.base_repository import StoreRepository
from store_delivery.models import StoreAddress, store_from_dict


class InMemoryStoreRepository(StoreRepository):
    """Serves a fixed snapshot of store records."""

    def __init__(self, stores: list[StoreAddress] | None = None):
        self._stores: dict[str, StoreAddress] = {}
        for store in stores or []:
            if store.id in self._stores:
                raise ValueError(f"Duplicate store id: {store.id}")
            self._stores[store.id] = store

    @classmethod
    def from_json_file(cls, path: str) -> "InMemoryStoreRepository":
        """Load stores from a JSON file.

        The file holds either a list of store records or the API envelope
        ``{"status": ..., "data": [...]}``.
        """
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        records = payload.get("data", []) if isinstance(payload, dict) else payload
        return cls([store_from_dict(r) for r in records])

    def get_store(self, store_id: str) -> StoreAddress | None:
        return self._stores.get(str(store_id))

    def list_stores(self) -> list[StoreAddress]:
        return list(self._stores.values())
