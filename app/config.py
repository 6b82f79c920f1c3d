"""
Configuration for the Dog Finder application.

Constants live at module level; anything that differs between deployments
is read from the environment by ``Settings.from_env``.
"""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Nearby search
DEFAULT_MAX_DISTANCE_M = 100000
DEFAULT_NEARBY_LIMIT = 200
MAX_NEARBY_LIMIT = 1000

# Image upload
MAX_IMAGE_SIZE_MB = 10
UPLOAD_PREFIX = "uploads"
UPLOAD_CACHE_CONTROL = "public, max-age=3600"

# Firestore
DOGS_COLLECTION = "dogs"

# Coat colors offered as map filters
DOG_CATEGORIES = [
    "Brown",
    "Black",
    "White",
    "Brown and White",
    "Black and White",
    "Unique",
]

DEFAULT_CORS_ORIGINS = [
    "https://adoptindie.onrender.com",
    "http://localhost:5173",
]


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Deployment settings resolved once at startup."""
    project_id: str = ""
    bucket_name: str = "adopt-indie-uploads"
    dogs_collection: str = DOGS_COLLECTION
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    port: int = 5000
    max_image_size_mb: int = MAX_IMAGE_SIZE_MB

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables (and a local .env file)."""
        load_dotenv()

        origins = os.getenv("CORS_ORIGINS")
        return cls(
            project_id=os.getenv("GOOGLE_CLOUD_PROJECT", ""),
            bucket_name=os.getenv("BUCKET_NAME", cls.bucket_name),
            dogs_collection=os.getenv("DOGS_COLLECTION", DOGS_COLLECTION),
            cors_origins=_split_origins(origins) if origins else list(DEFAULT_CORS_ORIGINS),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "5000")),
            max_image_size_mb=int(os.getenv("MAX_IMAGE_SIZE_MB", str(MAX_IMAGE_SIZE_MB))),
        )
