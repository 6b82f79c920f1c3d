"""
Wiring of the application services onto the Flask app.
"""
from dataclasses import dataclass

from flask import current_app

from ..config import Settings
from ..gcp_clients import GcpClients
from .ingestion_service import IngestionService
from .sighting_service import SightingService
from .storage_service import StorageService

EXTENSION_KEY = "dog_finder"


@dataclass
class ServiceRegistry:
    settings: Settings
    clients: GcpClients
    storage: StorageService
    sightings: SightingService
    ingestion: IngestionService


def build_services(settings: Settings, clients: GcpClients) -> ServiceRegistry:
    storage = StorageService(clients.storage_client, settings.bucket_name)
    sightings = SightingService(clients.firestore_client, settings.dogs_collection)
    return ServiceRegistry(
        settings=settings,
        clients=clients,
        storage=storage,
        sightings=sightings,
        ingestion=IngestionService(storage, sightings, settings.max_image_size_mb),
    )


def get_services() -> ServiceRegistry:
    """Services of the app handling the current request."""
    return current_app.extensions[EXTENSION_KEY]
