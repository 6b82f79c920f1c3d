"""
Input validation functions for the Dog Finder application.
"""
import math
from typing import Any, Optional
from werkzeug.datastructures import FileStorage

from ..config import (
    DEFAULT_MAX_DISTANCE_M,
    DEFAULT_NEARBY_LIMIT, MAX_IMAGE_SIZE_MB, MAX_NEARBY_LIMIT
)
from ..exceptions import ValidationError


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_float(value: Any) -> float:
    # bool is an int subclass; "true" is not a coordinate
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    return float(value)


def validate_coordinates(lat: Any, lng: Any) -> tuple[float, float]:
    """
    Validate and convert latitude/longitude coordinates.

    Args:
        lat: Latitude value (string from a query/form, or a JSON number)
        lng: Longitude value (string from a query/form, or a JSON number)

    Returns:
        tuple: (latitude, longitude) as floats

    Raises:
        ValidationError: If coordinates are invalid
    """
    if _is_blank(lat) or _is_blank(lng):
        raise ValidationError("coordinates", "Latitude and longitude are required")

    try:
        lat_float = _to_float(lat)
        lng_float = _to_float(lng)
    except (ValueError, TypeError):
        raise ValidationError("coordinates", "Latitude and longitude must be numeric")

    if not (math.isfinite(lat_float) and math.isfinite(lng_float)):
        raise ValidationError("coordinates", "Latitude and longitude must be finite numbers")

    if not (-90 <= lat_float <= 90):
        raise ValidationError("latitude", f"Latitude must be between -90 and 90, got {lat_float}")

    if not (-180 <= lng_float <= 180):
        raise ValidationError("longitude", f"Longitude must be between -180 and 180, got {lng_float}")

    return lat_float, lng_float


def validate_location(location: Any) -> tuple[float, float]:
    """
    Validate a ``{"lat": ..., "lng": ...}`` object from a JSON body.

    Returns:
        tuple: (latitude, longitude) as floats

    Raises:
        ValidationError: If the object is missing or its coordinates are invalid
    """
    if not isinstance(location, dict):
        raise ValidationError("location", "Location with lat and lng is required")
    return validate_coordinates(location.get("lat"), location.get("lng"))


def validate_max_distance(value: Any, default: float = DEFAULT_MAX_DISTANCE_M) -> float:
    """
    Validate search radius in meters.

    Raises:
        ValidationError: If the radius is not a finite, non-negative number
    """
    if _is_blank(value):
        return float(default)

    try:
        distance = _to_float(value)
    except (ValueError, TypeError):
        raise ValidationError("maxDistance", "maxDistance must be numeric")

    if not math.isfinite(distance) or distance < 0:
        raise ValidationError("maxDistance", f"maxDistance must be a non-negative number, got {value}")

    return distance


def validate_limit(value: Any, default: int = DEFAULT_NEARBY_LIMIT,
                   maximum: int = MAX_NEARBY_LIMIT) -> int:
    """
    Validate the maximum number of results for a nearby search.

    Raises:
        ValidationError: If limit is not an integer in [1, maximum]
    """
    if _is_blank(value):
        return default

    try:
        if isinstance(value, bool):
            raise TypeError("boolean is not a number")
        limit = int(value)
    except (ValueError, TypeError):
        raise ValidationError("limit", "limit must be an integer")

    if not (1 <= limit <= maximum):
        raise ValidationError("limit", f"limit must be between 1 and {maximum}, got {limit}")

    return limit


def coerce_text(value: Any) -> Optional[str]:
    """Coerce an optional free-text field to a stripped string, or None when empty."""
    if _is_blank(value):
        return None
    return str(value).strip()


def validate_image(image_file: Optional[FileStorage], max_size_mb: int = MAX_IMAGE_SIZE_MB) -> FileStorage:
    """
    Validate uploaded image file.

    Args:
        image_file: Uploaded file from request
        max_size_mb: Maximum file size in megabytes

    Returns:
        FileStorage: Valid image file

    Raises:
        ValidationError: If image is invalid
    """
    if not image_file:
        raise ValidationError("file", "No file uploaded")

    if not image_file.filename:
        raise ValidationError("file", "Uploaded file has no filename")

    image_file.seek(0, 2)
    file_size = image_file.tell()
    image_file.seek(0)

    max_size_bytes = max_size_mb * 1024 * 1024
    if file_size > max_size_bytes:
        raise ValidationError("file", f"File size ({file_size / 1024 / 1024:.2f}MB) exceeds maximum ({max_size_mb}MB)")

    if file_size == 0:
        raise ValidationError("file", "Uploaded file is empty")

    return image_file
