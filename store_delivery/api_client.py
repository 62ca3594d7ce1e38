"""M-Mart+ API client for store locations and address geocoding."""

import logging
import os

import requests
from dotenv import load_dotenv

from store_delivery.base_repository import StoreRepository
from store_delivery.errors import GeocodingError
from store_delivery.geo import GeoCoordinate
from store_delivery.models import StoreAddress, store_from_dict

load_dotenv()

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 10.0


class StoreLocationsClient(StoreRepository):
    """Client for the M-Mart+ /store-locations REST API."""

    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or os.getenv("MMART_API_URL", "")).rstrip("/")
        self.api_token = api_token or os.getenv("MMART_API_TOKEN", "")
        if not self.base_url:
            raise ValueError(
                "MMART_API_URL must be set either as an argument or in a .env file."
            )
        self.timeout = timeout or float(os.getenv("MMART_API_TIMEOUT", _DEFAULT_TIMEOUT))
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if self.api_token:
            self.session.headers["Authorization"] = f"Bearer {self.api_token}"

    def _get(self, endpoint: str, params: dict | None = None) -> dict:
        url = f"{self.base_url}/{endpoint}"
        logger.debug("GET %s params=%s", url, params)
        resp = self.session.get(url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _post(self, endpoint: str, payload: dict) -> dict:
        url = f"{self.base_url}/{endpoint}"
        logger.debug("POST %s", url)
        resp = self.session.post(url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _get_store_list(self, endpoint: str, params: dict | None = None) -> list[StoreAddress]:
        data = self._get(endpoint, params)
        return [store_from_dict(record) for record in data.get("data", [])]

    def list_stores(self) -> list[StoreAddress]:
        return self._get_store_list("store-locations")

    def list_active_stores(self) -> list[StoreAddress]:
        return self._get_store_list("store-locations", {"active": "true"})

    def list_pickup_stores(self) -> list[StoreAddress]:
        return self._get_store_list("store-locations/pickup")

    def get_store(self, store_id: str) -> StoreAddress | None:
        """Fetch one store by id.

        Args:
            store_id: Store identifier.

        Returns:
            The store, or None if the API answers 404.

        Raises:
            requests.HTTPError: For any other unsuccessful response.
        """
        try:
            data = self._get(f"store-locations/{store_id}")
        except requests.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 404:
                logger.warning("Store %s not found", store_id)
                return None
            raise
        record = data.get("data")
        if not record:
            return None
        return store_from_dict(record)

    def geocode(self, address: str) -> GeoCoordinate:
        """Resolve a free-text address to coordinates.

        Args:
            address: Delivery address as entered by the customer.

        Returns:
            The coordinate the geocoder returned.

        Raises:
            GeocodingError: If the response carries no usable coordinates.
        """
        data = self._post("geocode", {"address": address})
        coords = data.get("coordinates") or {}
        lat = coords.get("latitude")
        lng = coords.get("longitude")
        if lat is None or lng is None:
            raise GeocodingError(f"Could not geocode address: {address}")
        return GeoCoordinate(float(lat), float(lng))
