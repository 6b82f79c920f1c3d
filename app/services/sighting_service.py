"""
Sighting service for Firestore database operations.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, List

from google.cloud import firestore

from ..config import DEFAULT_MAX_DISTANCE_M, DEFAULT_NEARBY_LIMIT, DOGS_COLLECTION
from ..models.sighting import SightingRecord, SightingSubmission
from ..exceptions import RecordStoreError, ServiceUnavailableError
from ..utils.geo_helpers import haversine_m, latitude_band

logger = logging.getLogger(__name__)


@dataclass
class NearbyQuery:
    """A validated proximity search around (latitude, longitude)."""
    latitude: float
    longitude: float
    max_distance: float = DEFAULT_MAX_DISTANCE_M
    category: Optional[str] = None
    limit: int = DEFAULT_NEARBY_LIMIT


class SightingService:
    """Service for managing dog sightings in Firestore."""

    def __init__(self, firestore_client, collection_name: str = DOGS_COLLECTION):
        """
        Initialize sighting service.

        Args:
            firestore_client: Firestore client (None if it failed to initialize)
            collection_name: Collection holding the sighting documents
        """
        self.firestore = firestore_client
        self.collection_name = collection_name

    def create_sighting(self, submission: SightingSubmission) -> SightingRecord:
        """
        Create a new sighting in Firestore.

        Args:
            submission: Validated sighting fields

        Returns:
            SightingRecord: The stored record, including its document ID

        Raises:
            ServiceUnavailableError: If Firestore client is not initialized
            RecordStoreError: If the write fails
        """
        if not self.firestore:
            raise ServiceUnavailableError("Firestore")

        created_at = datetime.now(timezone.utc)
        document = submission.to_firestore_document(created_at)

        try:
            doc_ref = self.firestore.collection(self.collection_name).document()
            doc_ref.set(document)
        except Exception as e:
            logger.error(f"Failed to create sighting: {e}")
            raise RecordStoreError(f"Failed to create sighting: {str(e)}")

        logger.info(f"Created sighting document: {doc_ref.id}")
        return SightingRecord.from_firestore_doc(doc_ref.id, document)

    def find_nearby(self, query: NearbyQuery) -> List[SightingRecord]:
        """
        Sightings within query.max_distance meters of the center, nearest first.

        Firestore narrows the scan to a latitude band (GeoPoints order by
        latitude first); the exact great-circle filter and the ordering are
        applied here.

        Args:
            query: Validated search parameters

        Returns:
            list: SightingRecord objects with their distance set

        Raises:
            ServiceUnavailableError: If Firestore client is not initialized
            RecordStoreError: If the query fails
        """
        if not self.firestore:
            raise ServiceUnavailableError("Firestore")

        firestore_query = self._build_query(query)

        matches = []
        try:
            for doc in firestore_query.stream():
                data = doc.to_dict()
                location = data.get("location")
                if location is None:
                    continue

                distance = haversine_m(
                    query.latitude, query.longitude,
                    location.latitude, location.longitude
                )
                if distance <= query.max_distance:
                    matches.append(SightingRecord.from_firestore_doc(doc.id, data, distance=distance))
        except Exception as e:
            logger.error(f"Nearby query failed around ({query.latitude}, {query.longitude}): {e}")
            raise RecordStoreError(f"Failed to query sightings: {str(e)}")

        # sort is stable, so equal distances keep store order
        matches.sort(key=lambda record: record.distance)
        if len(matches) > query.limit:
            logger.info(f"Truncating {len(matches)} nearby sightings to {query.limit}")
            matches = matches[:query.limit]

        return matches

    def _build_query(self, query: NearbyQuery):
        """
        Build Firestore query for the latitude band and optional category.

        Args:
            query: Validated search parameters

        Returns:
            Query: Firestore query object
        """
        south, north = latitude_band(query.latitude, query.max_distance)

        firestore_query = self.firestore.collection(self.collection_name)
        firestore_query = firestore_query.where("location", ">=", firestore.GeoPoint(south, -180))
        firestore_query = firestore_query.where("location", "<=", firestore.GeoPoint(north, 180))

        if query.category:
            firestore_query = firestore_query.where("category", "==", query.category)

        return firestore_query
