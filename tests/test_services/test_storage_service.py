"""
Tests for the GCS storage service.
"""
import io
from unittest.mock import MagicMock, patch

import pytest
from werkzeug.datastructures import FileStorage

from app.exceptions import ServiceUnavailableError, StorageError
from app.services.storage_service import StorageService


def _image(name="my dog.jpg", data=b"fake_image_bytes"):
    return FileStorage(io.BytesIO(data), filename=name, content_type="image/jpeg")


@pytest.fixture
def storage_client():
    return MagicMock()


@pytest.fixture
def service(storage_client):
    return StorageService(storage_client, "test-bucket")


@patch('app.services.storage_service.time.time', return_value=1745406357.0)
def test_build_blob_name(mock_time, service):
    assert service.build_blob_name("my dog.jpg") == "uploads/1745406357000-my_dog.jpg"
    assert service.build_blob_name("../../etc/passwd") == "uploads/1745406357000-etc_passwd"
    assert service.build_blob_name(None) == "uploads/1745406357000-image"


@patch('app.services.storage_service.time.time', return_value=1745406357.0)
def test_upload_image(mock_time, service, storage_client):
    image = _image()
    blob = storage_client.bucket.return_value.blob.return_value

    url = service.upload_image(image)

    assert url == "https://storage.googleapis.com/test-bucket/uploads/1745406357000-my_dog.jpg"
    storage_client.bucket.assert_called_with("test-bucket")
    storage_client.bucket.return_value.blob.assert_called_with("uploads/1745406357000-my_dog.jpg")
    blob.upload_from_file.assert_called_once_with(image, content_type="image/jpeg")
    assert blob.cache_control == "public, max-age=3600"


def test_upload_with_explicit_name(service, storage_client):
    url = service.upload_image(_image(), blob_name="uploads/custom.jpg")
    assert url == "https://storage.googleapis.com/test-bucket/uploads/custom.jpg"


def test_upload_failure(service, storage_client):
    storage_client.bucket.return_value.blob.return_value.upload_from_file.side_effect = Exception("403 Forbidden")

    with pytest.raises(StorageError) as exc_info:
        service.upload_image(_image())
    assert "403 Forbidden" in str(exc_info.value)


def test_upload_without_client():
    with pytest.raises(ServiceUnavailableError) as exc_info:
        StorageService(None, "test-bucket").upload_image(_image())
    assert exc_info.value.service_name == "Storage"


def test_delete_image(service, storage_client):
    deleted = service.delete_image("https://storage.googleapis.com/test-bucket/uploads/1-dog.jpg")

    assert deleted is True
    storage_client.bucket.return_value.blob.assert_called_with("uploads/1-dog.jpg")
    storage_client.bucket.return_value.blob.return_value.delete.assert_called_once()


def test_delete_image_in_other_bucket(service, storage_client):
    assert service.delete_image("https://storage.googleapis.com/other/uploads/1-dog.jpg") is False
    storage_client.bucket.assert_not_called()


def test_delete_failure(service, storage_client):
    storage_client.bucket.return_value.blob.return_value.delete.side_effect = Exception("404")
    assert service.delete_image("gs://test-bucket/uploads/1-dog.jpg") is False


def test_delete_without_client():
    with pytest.raises(ServiceUnavailableError):
        StorageService(None, "test-bucket").delete_image("gs://test-bucket/a.jpg")
