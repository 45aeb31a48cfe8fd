"""
api.errors - JSON error handlers for the API blueprint.

Routes let domain exceptions propagate; they are mapped to status codes
here so every failure reaches the client as {"error": "..."}.
"""

import logging

from flask import jsonify

from api import api_bp
from import_engine.errors import ContactImportError
from services.geolocator import GeolocatorError

logger = logging.getLogger(__name__)


@api_bp.errorhandler(ContactImportError)
def api_import_failed(e):
    return jsonify({"error": str(e)}), 400


@api_bp.errorhandler(GeolocatorError)
def api_geolocator_failed(e):
    logger.warning(f"Geolocator lookup failed: {e}")
    return jsonify({"error": str(e)}), 502


@api_bp.errorhandler(400)
def api_bad_request(e):
    return jsonify({"error": getattr(e, "description", None) or "bad request"}), 400


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
