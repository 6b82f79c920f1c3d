import logging
from dataclasses import dataclass
from typing import Any, Optional

from google.cloud import storage
from google.cloud import firestore

from .config import Settings

logger = logging.getLogger(__name__)


@dataclass
class GcpClients:
    """Process-wide Google Cloud clients, created once before serving."""
    storage_client: Optional[Any] = None
    firestore_client: Optional[Any] = None

    def close(self):
        """Release the underlying HTTP/gRPC channels."""
        for name in ("storage_client", "firestore_client"):
            client = getattr(self, name)
            if client is None:
                continue
            try:
                client.close()
                logger.info(f"Closed {name}")
            except Exception as e:
                logger.warning(f"Failed to close {name}: {e}")
            setattr(self, name, None)


def init_services(settings: Settings) -> GcpClients:
    """
    Create the Storage and Firestore clients.

    A client that cannot be created is left as None; the services built on it
    report ServiceUnavailableError instead of failing at import time.
    """
    logger.info("Initializing services...")
    project = settings.project_id or None
    clients = GcpClients()

    try:
        clients.storage_client = storage.Client(project=project)
        logger.info(f"Successfully initialized Storage client. Bucket: {settings.bucket_name}")
    except Exception as e:
        logger.error(f"Failed to initialize Storage client: {e}")

    try:
        clients.firestore_client = firestore.Client(project=project)
        logger.info(f"Successfully initialized Firestore client. Collection: {settings.dogs_collection}")
    except Exception as e:
        logger.error(f"Failed to initialize Firestore client: {e}")

    return clients
