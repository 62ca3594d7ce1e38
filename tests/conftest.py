"""
Shared fixtures for the store delivery tests.
"""

import pytest

from store_delivery.geo import ClosedPolygon, GeoCoordinate
from store_delivery.models import DeliverySettings, OrderValueAdjustment, StoreAddress


# Roughly 1.1 km either side of the equator/prime-meridian origin.
SMALL_SQUARE = [
    GeoCoordinate(-0.01, -0.01),
    GeoCoordinate(-0.01, 0.01),
    GeoCoordinate(0.01, 0.01),
    GeoCoordinate(0.01, -0.01),
]


@pytest.fixture
def make_store():
    """Factory for stores at (0, 0) with simple, tier-free pricing."""

    def _make_store(
        store_id="store-1",
        latitude=0.0,
        longitude=0.0,
        geofence=None,
        adjustments=None,
        is_active=True,
        enable_delivery=True,
        allows_pickup=False,
        max_delivery_distance_km=10.0,
    ):
        return StoreAddress(
            id=store_id,
            name=f"Store {store_id}",
            latitude=latitude,
            longitude=longitude,
            street="1 Marina Road",
            city="Lagos",
            country="Nigeria",
            is_active=is_active,
            allows_pickup=allows_pickup,
            delivery_settings=DeliverySettings(
                base_fee=500,
                per_km_charge=100,
                order_value_adjustments=adjustments or [],
                max_delivery_distance_km=max_delivery_distance_km,
                outside_geofence_fee=300,
                enable_delivery=enable_delivery,
            ),
            geofence=ClosedPolygon(tuple(geofence)) if geofence is not None else None,
        )

    return _make_store


@pytest.fixture
def default_tiers():
    return [
        OrderValueAdjustment(5000, "percentage", 50),
        OrderValueAdjustment(10000, "fixed", 0),
    ]


@pytest.fixture
def store_record():
    """A store record shaped like the /store-locations API response."""
    return {
        "id": 7,
        "name": "M-Mart+ Lekki",
        "street": "12 Admiralty Way",
        "city": "Lekki",
        "state": "Lagos",
        "postalCode": "106104",
        "country": "Nigeria",
        "phone": "+234 800 000 0000",
        "email": "lekki@mmart.example",
        "latitude": 6.4474,
        "longitude": 3.4723,
        "isActive": True,
        "allowsPickup": True,
        "pickupInstructions": "Collect at the front desk.",
        "deliverySettings": {
            "baseFee": 700,
            "perKmCharge": 150,
            "orderValueAdjustments": [
                {"orderValueThreshold": 20000, "adjustmentType": "fixed", "adjustmentValue": 0},
            ],
            "maxDeliveryDistanceKm": 5,
            "outsideGeofenceFee": 400,
            "enableDelivery": True,
        },
        "openingHours": {
            "sunday": {"isOpen": True, "open": "12:00", "close": "16:00"},
        },
        "geofence": {
            "coordinates": [
                {"lat": 6.44, "lng": 3.46},
                {"lat": 6.44, "lng": 3.48},
                {"lat": 6.46, "lng": 3.48},
                {"lat": 6.46, "lng": 3.46},
                {"lat": 6.44, "lng": 3.46},
            ],
        },
    }
