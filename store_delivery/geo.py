"""Geographic primitives: great-circle distance and geofence containment."""

from dataclasses import dataclass
from math import atan2, cos, pi, sin, sqrt
from typing import Sequence

# Approximate radius of Earth in kilometres.
_EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoCoordinate:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def degrees_to_radians(deg: float) -> float:
    return deg * pi / 180


def haversine_distance_km(a: GeoCoordinate, b: GeoCoordinate) -> float:
    """Return the great-circle distance in km between two coordinates."""
    d_lat = degrees_to_radians(b.lat - a.lat)
    d_lng = degrees_to_radians(b.lng - a.lng)
    h = (
        sin(d_lat / 2) ** 2
        + cos(degrees_to_radians(a.lat))
        * cos(degrees_to_radians(b.lat))
        * sin(d_lng / 2) ** 2
    )
    return 2 * _EARTH_RADIUS_KM * atan2(sqrt(h), sqrt(1 - h))


def is_point_in_polygon(
    point: GeoCoordinate,
    polygon: Sequence[GeoCoordinate],
) -> bool:
    """Test whether *point* lies inside *polygon* using ray casting.

    The polygon is treated as closed: the last vertex connects back to the
    first, so an explicit closing vertex is optional (it only adds a
    zero-length edge, which never registers a crossing).

    Polygons with fewer than 3 vertices enclose no area and always return
    ``False``. Points exactly on an edge may be classified either way.

    Args:
        point: Coordinate to test.
        polygon: Ordered vertices of a simple polygon.

    Returns:
        True if the even-odd rule places the point inside.
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        vi, vj = polygon[i], polygon[j]
        if (vi.lng > point.lng) != (vj.lng > point.lng):
            lat_at_point = (vj.lat - vi.lat) * (point.lng - vi.lng) / (vj.lng - vi.lng) + vi.lat
            if point.lat < lat_at_point:
                inside = not inside
        j = i
    return inside


@dataclass(frozen=True)
class ClosedPolygon:
    """An immutable geofence boundary.

    The last vertex implicitly connects back to the first. A trailing
    vertex equal to the first one is dropped on construction, so
    ``vertices`` never repeats its starting point.
    """

    vertices: tuple[GeoCoordinate, ...]

    def __post_init__(self):
        vertices = tuple(self.vertices)
        if len(vertices) > 1 and vertices[-1] == vertices[0]:
            vertices = vertices[:-1]
        object.__setattr__(self, "vertices", vertices)

    def __len__(self) -> int:
        return len(self.vertices)

    def contains(self, point: GeoCoordinate) -> bool:
        return is_point_in_polygon(point, self.vertices)
