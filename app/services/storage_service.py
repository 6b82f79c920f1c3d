"""
Storage service for handling image uploads to Google Cloud Storage.
"""
import time
import logging
from typing import Optional

from werkzeug.utils import secure_filename

from ..config import UPLOAD_CACHE_CONTROL, UPLOAD_PREFIX
from ..exceptions import StorageError, ServiceUnavailableError
from ..utils.url_helpers import gs_to_public_url, public_url_to_blob_name

logger = logging.getLogger(__name__)


class StorageService:
    """Service for managing image uploads to GCS."""

    def __init__(self, storage_client, bucket_name: str):
        """
        Initialize storage service.

        Args:
            storage_client: GCS storage client (None if it failed to initialize)
            bucket_name: Name of the GCS bucket
        """
        self.storage_client = storage_client
        self.bucket_name = bucket_name

    def build_blob_name(self, original_name: Optional[str]) -> str:
        """Unique object key: uploads/<epoch millis>-<sanitized original name>."""
        safe_name = secure_filename(original_name or "") or "image"
        return f"{UPLOAD_PREFIX}/{int(time.time() * 1000)}-{safe_name}"

    def upload_image(self, image_file, blob_name: Optional[str] = None) -> str:
        """
        Upload image file to GCS.

        Args:
            image_file: File object to upload (werkzeug FileStorage)
            blob_name: Optional object key (generated from the filename if not provided)

        Returns:
            str: Public HTTPS URL of the uploaded image

        Raises:
            ServiceUnavailableError: If storage client is not initialized
            StorageError: If upload fails
        """
        if not self.storage_client:
            raise ServiceUnavailableError("Storage")

        blob_name = blob_name or self.build_blob_name(image_file.filename)

        try:
            bucket = self.storage_client.bucket(self.bucket_name)
            blob = bucket.blob(blob_name)
            blob.cache_control = UPLOAD_CACHE_CONTROL
            blob.upload_from_file(image_file, content_type=image_file.content_type)
        except Exception as e:
            logger.error(f"Failed to upload image to GCS: {e}")
            raise StorageError(f"Failed to upload image: {str(e)}")

        image_url = gs_to_public_url(f"gs://{self.bucket_name}/{blob_name}")
        logger.info(f"Successfully uploaded image to {image_url}")
        return image_url

    def delete_image(self, image_url: str) -> bool:
        """
        Delete a previously uploaded image.

        Args:
            image_url: URL returned by upload_image

        Returns:
            bool: True if deleted successfully, False otherwise

        Raises:
            ServiceUnavailableError: If storage client is not initialized
        """
        if not self.storage_client:
            raise ServiceUnavailableError("Storage")

        blob_name = public_url_to_blob_name(image_url, self.bucket_name)
        if not blob_name:
            logger.warning(f"Not an object in bucket {self.bucket_name}: {image_url}")
            return False

        try:
            bucket = self.storage_client.bucket(self.bucket_name)
            bucket.blob(blob_name).delete()
            logger.info(f"Successfully deleted image: {image_url}")
            return True
        except Exception as e:
            logger.error(f"Failed to delete image {image_url}: {e}")
            return False
