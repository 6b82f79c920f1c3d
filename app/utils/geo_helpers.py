"""
Geographic helper utilities for proximity searches.
"""
import math

# Earth radius (m) of MongoDB 2dsphere distance calculations
EARTH_RADIUS_M = 6378100.0


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Great-circle distance between two points on the sphere.

    Args:
        lat1: Latitude of the first point
        lng1: Longitude of the first point
        lat2: Latitude of the second point
        lng2: Longitude of the second point

    Returns:
        float: Distance in meters
    """
    p1 = math.radians(lat1)
    p2 = math.radians(lat2)
    dphi = p2 - p1
    dl = math.radians(lng2 - lng1)
    a = math.sin(dphi / 2.0) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2.0) ** 2
    # Rounding can push a slightly above 1 for antipodal points
    a = min(1.0, a)
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(a))


def latitude_band(lat: float, radius_m: float) -> tuple[float, float]:
    """
    Latitude range that contains every point within radius_m of lat.

    Along a meridian one degree is a fixed arc length, so the band is exact
    in latitude; longitude is left unbounded.

    Args:
        lat: Center latitude
        radius_m: Search radius in meters

    Returns:
        tuple: (south, north) clamped to [-90, 90]
    """
    delta = math.degrees(radius_m / EARTH_RADIUS_M)
    return max(-90.0, lat - delta), min(90.0, lat + delta)


def to_geojson_point(lat: float, lng: float) -> dict:
    """GeoJSON point; coordinates are ordered [longitude, latitude]."""
    return {"type": "Point", "coordinates": [lng, lat]}
