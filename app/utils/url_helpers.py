"""
URL helper utilities for the Dog Finder application.
"""
from typing import Optional
from urllib.parse import quote, unquote

PUBLIC_URL_PREFIX = "https://storage.googleapis.com/"


def gs_to_public_url(gs_url: str) -> str:
    """
    Convert gs:// URL to public HTTPS URL.

    Args:
        gs_url: GCS URL in format gs://bucket/path/to/file

    Returns:
        str: Public HTTPS URL or original URL if conversion fails
    """
    if not gs_url or not gs_url.startswith("gs://"):
        return gs_url

    path = gs_url[len("gs://"):]
    parts = path.split("/", 1)

    if len(parts) == 2 and parts[0] and parts[1]:
        bucket, file_path = parts
        return f"{PUBLIC_URL_PREFIX}{bucket}/{quote(file_path)}"
    return gs_url


def public_url_to_blob_name(url: str, bucket_name: str) -> Optional[str]:
    """
    Recover the object key from a public or gs:// URL in the given bucket.

    Args:
        url: URL returned by an earlier upload
        bucket_name: Bucket the object is expected to live in

    Returns:
        str: Object key, or None if the URL does not point into the bucket
    """
    if not url:
        return None

    for prefix in (f"{PUBLIC_URL_PREFIX}{bucket_name}/", f"gs://{bucket_name}/"):
        if url.startswith(prefix):
            blob_name = unquote(url[len(prefix):])
            return blob_name or None
    return None
