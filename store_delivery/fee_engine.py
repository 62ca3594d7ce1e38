"""Delivery fee calculation against a store's geofence and pricing rules."""

import logging
from dataclasses import dataclass
from typing import Iterable

from store_delivery.geo import GeoCoordinate, haversine_distance_km
from store_delivery.models import DeliveryFeeResult, DeliverySettings, StoreAddress
from store_delivery.money import apply_percentage_discount, round_half_up

logger = logging.getLogger(__name__)

# Allowance subtracted from the store distance to approximate the distance
# beyond the geofence edge. Not a nearest-edge computation.
GEOFENCE_EDGE_ALLOWANCE_KM = 1.0

DELIVERY_UNAVAILABLE_MESSAGE = "Delivery is not available from this store."
OUTSIDE_AREA_MESSAGE = (
    "This address is outside our delivery area. "
    "Maximum delivery distance is {max_km}km."
)
OUTSIDE_GEOFENCE_MESSAGE = (
    "Additional fee applied for delivery outside our standard delivery area."
)


def _format_km(value: float) -> str:
    # 10.0 -> "10", 2.5 -> "2.5", 1e6 -> "1000000"
    return f"{value:.15g}"


def _is_within_geofence(store: StoreAddress, customer: GeoCoordinate) -> bool:
    """Return True when no usable geofence is configured."""
    if store.geofence is None or len(store.geofence) <= 2:
        return True
    return store.geofence.contains(customer)


def _apply_order_value_adjustment(
    fee: int,
    order_value: int,
    settings: DeliverySettings,
) -> int:
    """Apply the highest-threshold tier the order qualifies for, if any."""
    tiers = sorted(
        settings.order_value_adjustments,
        key=lambda a: a.order_value_threshold,
        reverse=True,
    )
    for tier in tiers:
        if order_value >= tier.order_value_threshold:
            if tier.adjustment_type == "fixed":
                return round_half_up(tier.adjustment_value)
            return apply_percentage_discount(fee, tier.adjustment_value)
    return fee


def calculate_delivery_fee(
    store: StoreAddress,
    order_value: int,
    customer_lat: float,
    customer_lng: float,
) -> DeliveryFeeResult:
    """Price delivery of an order from *store* to the customer's location.

    Refusals are returned as results with ``is_delivery_available=False``
    and a customer-facing message; this function does not raise for them.

    Args:
        store: Store record including delivery settings and geofence.
        order_value: Pre-delivery order subtotal in minor units.
        customer_lat: Customer latitude in decimal degrees.
        customer_lng: Customer longitude in decimal degrees.

    Returns:
        The fee decision. ``fee`` is never negative.
    """
    settings = store.delivery_settings
    if not store.is_active or not settings.enable_delivery:
        logger.debug("Store %s does not deliver", store.id)
        return DeliveryFeeResult(
            fee=0,
            is_delivery_available=False,
            message=DELIVERY_UNAVAILABLE_MESSAGE,
        )

    customer = GeoCoordinate(customer_lat, customer_lng)
    distance_km = haversine_distance_km(store.location, customer)
    within_geofence = _is_within_geofence(store, customer)

    if not within_geofence:
        distance_to_geofence = max(0.0, distance_km - GEOFENCE_EDGE_ALLOWANCE_KM)
        if distance_to_geofence > settings.max_delivery_distance_km:
            logger.debug(
                "Store %s: %.2f km beyond geofence exceeds %.2f km limit",
                store.id, distance_to_geofence, settings.max_delivery_distance_km,
            )
            return DeliveryFeeResult(
                fee=0,
                is_delivery_available=False,
                message=OUTSIDE_AREA_MESSAGE.format(
                    max_km=_format_km(settings.max_delivery_distance_km),
                ),
                distance_km=distance_km,
                is_within_geofence=False,
            )

    fee = settings.base_fee + round_half_up(distance_km * settings.per_km_charge)
    if not within_geofence:
        fee += settings.outside_geofence_fee

    fee = max(_apply_order_value_adjustment(fee, order_value, settings), 0)

    logger.debug(
        "Store %s: fee %d for %.2f km (within geofence: %s, order value %d)",
        store.id, fee, distance_km, within_geofence, order_value,
    )
    return DeliveryFeeResult(
        fee=fee,
        is_delivery_available=True,
        message=None if within_geofence else OUTSIDE_GEOFENCE_MESSAGE,
        distance_km=distance_km,
        is_within_geofence=within_geofence,
    )


@dataclass
class DeliveryZoneCheck:
    """Whether a location is served, and by which store."""

    within_zone: bool
    nearest_store: StoreAddress | None = None
    distance_km: float | None = None


def _delivers(store: StoreAddress) -> bool:
    return store.is_active and store.delivery_settings.enable_delivery


def check_delivery_zone(
    stores: Iterable[StoreAddress],
    customer_lat: float,
    customer_lng: float,
) -> DeliveryZoneCheck:
    """Find the nearest delivering store and whether its geofence covers the customer.

    Stores that are inactive or have delivery disabled are ignored.
    """
    customer = GeoCoordinate(customer_lat, customer_lng)
    nearest: StoreAddress | None = None
    best_dist = float("inf")
    for store in stores:
        if not _delivers(store):
            continue
        d = haversine_distance_km(store.location, customer)
        if d < best_dist:
            best_dist = d
            nearest = store

    if nearest is None:
        return DeliveryZoneCheck(within_zone=False)

    return DeliveryZoneCheck(
        within_zone=_is_within_geofence(nearest, customer),
        nearest_store=nearest,
        distance_km=best_dist,
    )


@dataclass
class DeliveryQuote:
    store: StoreAddress
    result: DeliveryFeeResult


def quote_delivery(
    stores: Iterable[StoreAddress],
    order_value: int,
    customer_lat: float,
    customer_lng: float,
) -> list[DeliveryQuote]:
    """Price delivery from every store and return the available quotes.

    Quotes are ordered by fee, then distance, then store id.
    """
    quotes: list[DeliveryQuote] = []
    for store in stores:
        result = calculate_delivery_fee(store, order_value, customer_lat, customer_lng)
        if result.is_delivery_available:
            quotes.append(DeliveryQuote(store=store, result=result))

    quotes.sort(key=lambda q: (q.result.fee, q.result.distance_km, q.store.id))
    return quotes
