"""Shared data models for store locations and delivery pricing."""

from dataclasses import dataclass, field

from store_delivery.geo import ClosedPolygon, GeoCoordinate

ADJUSTMENT_TYPES = ("percentage", "fixed")

_WEEKDAYS = (
    "monday", "tuesday", "wednesday", "thursday",
    "friday", "saturday", "sunday",
)


@dataclass
class OrderValueAdjustment:
    """One delivery-fee promotion tier, applied once the order reaches a threshold.

    ``adjustment_value`` is a percentage (0-100) for ``"percentage"`` tiers
    and a replacement fee in minor units for ``"fixed"`` tiers.
    """

    order_value_threshold: int
    adjustment_type: str
    adjustment_value: float

    def __post_init__(self):
        if self.adjustment_type not in ADJUSTMENT_TYPES:
            raise ValueError(
                f"Unsupported adjustment type '{self.adjustment_type}'. "
                f"Supported: {', '.join(ADJUSTMENT_TYPES)}."
            )


@dataclass
class DeliverySettings:
    """Per-store delivery pricing configuration. Money in minor units."""

    base_fee: int
    per_km_charge: int
    order_value_adjustments: list[OrderValueAdjustment] = field(default_factory=list)
    # Distance allowed beyond the geofence boundary.
    max_delivery_distance_km: float = 10.0
    outside_geofence_fee: int = 0
    enable_delivery: bool = True


def default_delivery_settings() -> DeliverySettings:
    """Return the storefront's default delivery settings."""
    return DeliverySettings(
        base_fee=500,
        per_km_charge=100,
        order_value_adjustments=[
            OrderValueAdjustment(5000, "percentage", 50),
            OrderValueAdjustment(10000, "fixed", 0),
        ],
        max_delivery_distance_km=10.0,
        outside_geofence_fee=300,
        enable_delivery=True,
    )


@dataclass
class DayHours:
    is_open: bool
    open: str
    close: str


@dataclass
class OpeningHours:
    """Weekly opening hours, "HH:MM" strings per day."""

    monday: DayHours
    tuesday: DayHours
    wednesday: DayHours
    thursday: DayHours
    friday: DayHours
    saturday: DayHours
    sunday: DayHours


def default_opening_hours() -> OpeningHours:
    weekday = dict(is_open=True, open="09:00", close="18:00")
    return OpeningHours(
        monday=DayHours(**weekday),
        tuesday=DayHours(**weekday),
        wednesday=DayHours(**weekday),
        thursday=DayHours(**weekday),
        friday=DayHours(**weekday),
        saturday=DayHours(is_open=True, open="10:00", close="17:00"),
        sunday=DayHours(is_open=False, open="10:00", close="17:00"),
    )


@dataclass
class StoreAddress:
    """A store location as maintained by the store admin."""

    id: str
    name: str
    latitude: float
    longitude: float
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    phone: str = ""
    email: str = ""
    is_active: bool = True
    allows_pickup: bool = False
    pickup_instructions: str | None = None
    delivery_settings: DeliverySettings = field(default_factory=default_delivery_settings)
    opening_hours: OpeningHours = field(default_factory=default_opening_hours)
    geofence: ClosedPolygon | None = None

    @property
    def location(self) -> GeoCoordinate:
        return GeoCoordinate(self.latitude, self.longitude)

    @property
    def full_address(self) -> str:
        parts = [self.street, self.city, self.state, self.postal_code, self.country]
        return ", ".join(p for p in parts if p)


@dataclass
class DeliveryFeeResult:
    """Outcome of a delivery-fee calculation.

    ``message`` explains a refusal, or notes an outside-geofence surcharge
    when delivery is available.
    """

    fee: int
    is_delivery_available: bool
    message: str | None = None
    distance_km: float | None = None
    is_within_geofence: bool | None = None

    def to_dict(self) -> dict:
        data: dict = {
            "fee": self.fee,
            "isDeliveryAvailable": self.is_delivery_available,
        }
        if self.message is not None:
            data["message"] = self.message
        if self.distance_km is not None:
            data["distanceKm"] = round(self.distance_km, 3)
        return data


def _require(data: dict, key: str):
    if data.get(key) is None:
        raise ValueError(f"Store record is missing required field '{key}'.")
    return data[key]


def _get(data: dict, key: str, default):
    # JSON null counts as missing.
    value = data.get(key)
    return default if value is None else value


def _parse_adjustment(data: dict) -> OrderValueAdjustment:
    return OrderValueAdjustment(
        order_value_threshold=int(_require(data, "orderValueThreshold")),
        adjustment_type=_require(data, "adjustmentType"),
        adjustment_value=float(_require(data, "adjustmentValue")),
    )


def _parse_delivery_settings(data: dict | None) -> DeliverySettings:
    if not data:
        return default_delivery_settings()
    defaults = default_delivery_settings()
    adjustments = data.get("orderValueAdjustments")
    return DeliverySettings(
        base_fee=int(_get(data, "baseFee", defaults.base_fee)),
        per_km_charge=int(_get(data, "perKmCharge", defaults.per_km_charge)),
        order_value_adjustments=(
            [_parse_adjustment(a) for a in adjustments]
            if adjustments is not None
            else defaults.order_value_adjustments
        ),
        max_delivery_distance_km=float(
            _get(data, "maxDeliveryDistanceKm", defaults.max_delivery_distance_km)
        ),
        outside_geofence_fee=int(_get(data, "outsideGeofenceFee", defaults.outside_geofence_fee)),
        enable_delivery=bool(_get(data, "enableDelivery", defaults.enable_delivery)),
    )


def _parse_opening_hours(data: dict | None) -> OpeningHours:
    hours = default_opening_hours()
    if not data:
        return hours
    for day in _WEEKDAYS:
        day_data = data.get(day)
        if day_data:
            setattr(hours, day, DayHours(
                is_open=bool(day_data.get("isOpen", False)),
                open=day_data.get("open", ""),
                close=day_data.get("close", ""),
            ))
    return hours


def _parse_geofence(data) -> ClosedPolygon | None:
    if not data:
        return None
    # Accept both {"coordinates": [...]} and a bare list of points.
    points = data.get("coordinates", []) if isinstance(data, dict) else data
    if not points:
        return None
    if not all(isinstance(p, dict) for p in points):
        raise ValueError("Geofence points must be objects with 'lat' and 'lng'.")
    return ClosedPolygon(tuple(
        GeoCoordinate(float(_require(p, "lat")), float(_require(p, "lng")))
        for p in points
    ))


def store_from_dict(data: dict) -> StoreAddress:
    """Build a StoreAddress from a camelCase API store record.

    Args:
        data: Store record as returned by the /store-locations endpoints.

    Returns:
        The parsed StoreAddress.

    Raises:
        ValueError: If the record lacks an id or coordinates, or holds an
            unknown adjustment type.
    """
    return StoreAddress(
        id=str(_require(data, "id")),
        name=data.get("name", ""),
        latitude=float(_require(data, "latitude")),
        longitude=float(_require(data, "longitude")),
        street=data.get("street", ""),
        city=data.get("city", ""),
        state=data.get("state", ""),
        postal_code=data.get("postalCode", ""),
        country=data.get("country", ""),
        phone=data.get("phone", ""),
        email=data.get("email", ""),
        is_active=bool(_get(data, "isActive", True)),
        allows_pickup=bool(_get(data, "allowsPickup", False)),
        pickup_instructions=data.get("pickupInstructions"),
        delivery_settings=_parse_delivery_settings(data.get("deliverySettings")),
        opening_hours=_parse_opening_hours(data.get("openingHours")),
        geofence=_parse_geofence(data.get("geofence")),
    )
