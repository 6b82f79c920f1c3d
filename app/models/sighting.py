"""
Data models and schemas for the Dog Finder application.
"""
from dataclasses import dataclass
from typing import Optional
from datetime import datetime

from google.cloud import firestore

from ..utils.geo_helpers import to_geojson_point
from ..utils.validators import coerce_text, validate_location


@dataclass
class Location:
    """A validated point on the map."""
    latitude: float
    longitude: float

    @classmethod
    def from_geopoint(cls, geopoint) -> 'Location':
        """Create from a Firestore GeoPoint."""
        return cls(latitude=geopoint.latitude, longitude=geopoint.longitude)

    def to_geopoint(self) -> firestore.GeoPoint:
        """Firestore GeoPoint takes (latitude, longitude)."""
        return firestore.GeoPoint(self.latitude, self.longitude)

    def to_dict(self) -> dict:
        """GeoJSON representation, coordinates ordered [lng, lat]."""
        return to_geojson_point(self.latitude, self.longitude)


@dataclass
class SightingSubmission:
    """A dog sighting as reported by a client, validated and ready to store."""
    location: Location
    image_url: Optional[str] = None
    category: Optional[str] = None
    age: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict, image_url: Optional[str] = None) -> 'SightingSubmission':
        """
        Build a submission from a request payload.

        The payload uses the API field names: ``location`` ({lat, lng}),
        ``imageUrl``, ``category`` (or ``type``), ``age``, ``email``, ``phone``.
        An explicit image_url (from an upload in the same request) wins over
        the payload's ``imageUrl``.

        Raises:
            ValidationError: If the location is missing or malformed
        """
        lat, lng = validate_location(payload.get("location"))
        return cls(
            location=Location(latitude=lat, longitude=lng),
            image_url=image_url or coerce_text(payload.get("imageUrl")),
            category=coerce_text(payload.get("category")) or coerce_text(payload.get("type")),
            age=coerce_text(payload.get("age")),
            email=coerce_text(payload.get("email")),
            phone=coerce_text(payload.get("phone")),
        )

    def to_firestore_document(self, created_at: datetime) -> dict:
        """
        Convert to Firestore document format.

        Args:
            created_at: Insert timestamp, set by the server

        Returns:
            dict: Document data for Firestore
        """
        return {
            "created_at": created_at,
            "location": self.location.to_geopoint(),
            "image_url": self.image_url,
            "category": self.category,
            "age": self.age,
            "email": self.email,
            "phone": self.phone,
        }


@dataclass
class SightingRecord:
    """Represents a stored sighting in API responses."""
    id: str
    location: Location
    created_at: Optional[datetime] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    age: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    distance: Optional[float] = None

    @classmethod
    def from_firestore_doc(cls, doc_id, data: dict, distance: Optional[float] = None) -> 'SightingRecord':
        """Create from Firestore document."""
        return cls(
            id=str(doc_id),
            location=Location.from_geopoint(data["location"]),
            created_at=data.get("created_at"),
            image_url=data.get("image_url"),
            category=data.get("category"),
            age=data.get("age"),
            email=data.get("email"),
            phone=data.get("phone"),
            distance=distance,
        )

    def to_dict(self) -> dict:
        """
        Convert to dictionary for JSON response.

        ``_id`` and ``type`` repeat ``id`` and ``category`` under the names
        the map client reads.
        """
        result = {
            "id": self.id,
            "_id": self.id,
            "imageUrl": self.image_url,
            "category": self.category,
            "type": self.category,
            "location": self.location.to_dict(),
            "age": self.age,
            "email": self.email,
            "phone": self.phone,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if self.distance is not None:
            result["distance"] = round(self.distance, 1)
        return result
