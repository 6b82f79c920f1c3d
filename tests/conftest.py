"""
Shared fixtures: a Flask test client wired to an in-memory Firestore
collection and a mocked GCS client.
"""
import uuid
import operator
from unittest.mock import MagicMock

import pytest
from google.cloud import firestore

from app import create_app
from app.config import Settings
from app.gcp_clients import GcpClients

_OPS = {
    "==": operator.eq,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def _comparable(value):
    # Firestore orders GeoPoints by latitude, then longitude
    if hasattr(value, "latitude") and hasattr(value, "longitude"):
        return (value.latitude, value.longitude)
    return value


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return dict(self._data)


class FakeDocumentRef:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def set(self, data):
        self._collection.docs[self.id] = dict(data)


class FakeQuery:
    def __init__(self, collection, filters=()):
        self._collection = collection
        self._filters = filters

    def where(self, field, op, value):
        return FakeQuery(self._collection, self._filters + ((field, op, value),))

    def _matches(self, data):
        for field, op, value in self._filters:
            if data.get(field) is None:
                return False
            if not _OPS[op](_comparable(data[field]), _comparable(value)):
                return False
        return True

    def stream(self):
        for doc_id, data in list(self._collection.docs.items()):
            if self._matches(data):
                yield FakeSnapshot(doc_id, data)


class FakeCollection(FakeQuery):
    def __init__(self):
        self.docs = {}
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocumentRef(self, doc_id or uuid.uuid4().hex)


class FakeFirestore:
    """Just enough of firestore.Client for the sighting queries."""

    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def settings():
    return Settings(
        project_id="test-project",
        bucket_name="test-bucket",
        dogs_collection="dogs",
        cors_origins=["https://adoptindie.onrender.com", "http://localhost:5173"],
    )


@pytest.fixture
def fake_firestore():
    return FakeFirestore()


@pytest.fixture
def storage_client():
    return MagicMock()


@pytest.fixture
def seed_dog(fake_firestore, settings):
    """Insert a sighting document directly into the fake collection."""
    def _seed(doc_id, lat, lng, category=None, **fields):
        data = {
            "location": firestore.GeoPoint(lat, lng),
            "category": category,
            "image_url": fields.get("image_url"),
            "age": fields.get("age"),
            "email": fields.get("email"),
            "phone": fields.get("phone"),
            "created_at": fields.get("created_at"),
        }
        fake_firestore.collection(settings.dogs_collection).document(doc_id).set(data)
        return doc_id
    return _seed


@pytest.fixture
def app(settings, storage_client, fake_firestore):
    flask_app = create_app(settings, GcpClients(storage_client=storage_client, firestore_client=fake_firestore))
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
