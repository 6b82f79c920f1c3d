import logging
from flask import Blueprint, request, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from .config import DOG_CATEGORIES
from .exceptions import RecordStoreError, ServiceUnavailableError, StorageError, ValidationError
from .models.sighting import SightingSubmission
from .services.registry import get_services
from .services.sighting_service import NearbyQuery
from .utils.validators import (
    validate_coordinates, validate_image,
    validate_limit, validate_max_distance
)

main_bp = Blueprint('main', __name__)
logger = logging.getLogger(__name__)


@main_bp.app_errorhandler(RequestEntityTooLarge)
def request_too_large(e):
    message = "Request body exceeds the upload size limit"
    return jsonify({"error": message, "message": message}), 413


@main_bp.route('/health')
def health():
    return jsonify({"status": "ok"}), 200


@main_bp.route('/upload', methods=['POST'])
def upload_file():
    services = get_services()
    image_file = request.files.get('file')

    try:
        validate_image(image_file, services.settings.max_image_size_mb)
    except ValidationError as e:
        return jsonify({"error": e.message}), 400

    try:
        download_url = services.storage.upload_image(image_file)
    except ServiceUnavailableError as e:
        return jsonify({"error": str(e)}), 503
    except StorageError:
        return jsonify({"error": "File upload failed"}), 500

    return jsonify({"downloadUrl": download_url}), 200


@main_bp.route('/api/dogs', methods=['POST'])
def create_dog():
    services = get_services()
    payload = request.get_json(silent=True)

    if not isinstance(payload, dict):
        return jsonify({"message": "Request body must be a JSON object"}), 400

    try:
        submission = SightingSubmission.from_payload(payload)
    except ValidationError as e:
        return jsonify({"message": e.message, "field": e.field}), 400

    try:
        record = services.sightings.create_sighting(submission)
    except ServiceUnavailableError as e:
        return jsonify({"message": str(e)}), 503
    except RecordStoreError as e:
        return jsonify({"message": "Error saving dog", "error": str(e)}), 500

    return jsonify(record.to_dict()), 201


@main_bp.route('/api/dogs/nearby', methods=['GET'])
def get_nearby_dogs():
    services = get_services()

    try:
        lat, lng = validate_coordinates(request.args.get('lat'), request.args.get('lng'))
        query = NearbyQuery(
            latitude=lat,
            longitude=lng,
            max_distance=validate_max_distance(request.args.get('maxDistance')),
            category=request.args.get('type') or None,
            limit=validate_limit(request.args.get('limit')),
        )
    except ValidationError as e:
        return jsonify({"message": e.message, "field": e.field}), 400

    logger.info(f"Nearby query: center=({lng}, {lat}) maxDistance={query.max_distance} type={query.category}")

    try:
        records = services.sightings.find_nearby(query)
    except ServiceUnavailableError as e:
        return jsonify({"message": str(e)}), 503
    except RecordStoreError as e:
        return jsonify({"message": "Error fetching nearby dogs", "error": str(e)}), 500

    return jsonify([record.to_dict() for record in records]), 200


@main_bp.route('/api/dogs/categories', methods=['GET'])
def list_categories():
    return jsonify(DOG_CATEGORIES), 200


@main_bp.route('/submit', methods=['POST'])
def submit_dog():
    services = get_services()
    form = request.form
    payload = {
        "location": {"lat": form.get('lat'), "lng": form.get('lng')},
        "category": form.get('category'),
        "type": form.get('type'),
        "age": form.get('age'),
        "email": form.get('email'),
        "phone": form.get('phone'),
    }
    image_file = request.files.get('file')

    try:
        record = services.ingestion.submit(payload, image_file)
    except ValidationError as e:
        return jsonify({"error": e.message, "field": e.field}), 400
    except ServiceUnavailableError as e:
        return jsonify({"error": str(e)}), 503
    except StorageError:
        return jsonify({"error": "Failed to upload image"}), 500
    except RecordStoreError:
        return jsonify({"error": "Failed to save sighting"}), 500

    return jsonify(record.to_dict()), 201
