"""Exceptions shared across store delivery modules."""


class GeocodingError(Exception):
    """Raised when the geocoder cannot resolve an address to coordinates."""
