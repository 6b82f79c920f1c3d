"""
Report a sighting with its photo in one request.
"""
import logging
from typing import Optional

from werkzeug.datastructures import FileStorage

from ..config import MAX_IMAGE_SIZE_MB
from ..exceptions import DogFinderError
from ..models.sighting import SightingRecord, SightingSubmission
from ..utils.validators import validate_image
from .sighting_service import SightingService
from .storage_service import StorageService

logger = logging.getLogger(__name__)


class IngestionService:
    """Uploads the photo, then stores the record; removes the photo if the record fails."""

    def __init__(self, storage_service: StorageService, sighting_service: SightingService,
                 max_image_size_mb: int = MAX_IMAGE_SIZE_MB):
        self.storage = storage_service
        self.sightings = sighting_service
        self.max_image_size_mb = max_image_size_mb

    def submit(self, payload: dict, image_file: Optional[FileStorage] = None) -> SightingRecord:
        """
        Store an optional image and a sighting record.

        The payload is validated before anything is uploaded. If the record
        insert fails after the upload, the uploaded object is deleted and the
        insert error is re-raised.

        Args:
            payload: Sighting fields using the API names (see SightingSubmission.from_payload)
            image_file: Optional uploaded photo

        Returns:
            SightingRecord: The stored record

        Raises:
            ValidationError: If the payload or the image is invalid
            StorageError: If the upload fails (nothing is stored)
            RecordStoreError: If the insert fails
            ServiceUnavailableError: If a required client is not initialized
        """
        submission = SightingSubmission.from_payload(payload)

        if image_file:
            validate_image(image_file, self.max_image_size_mb)
            submission.image_url = self.storage.upload_image(image_file)

        try:
            return self.sightings.create_sighting(submission)
        except DogFinderError:
            if submission.image_url and image_file:
                self._discard_image(submission.image_url)
            raise

    def _discard_image(self, image_url: str):
        try:
            deleted = self.storage.delete_image(image_url)
        except DogFinderError as e:
            logger.error(f"Could not remove orphaned image {image_url}: {e}")
            return

        if deleted:
            logger.warning(f"Removed image {image_url} after failed sighting insert")
        else:
            logger.error(f"Orphaned image left in storage: {image_url}")
