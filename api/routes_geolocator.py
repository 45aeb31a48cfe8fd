"""
api.routes_geolocator - /api/v1/geolocator/query endpoint.
"""

from flask import request, jsonify

from api import api_bp
from services.geolocator import get_geolocator


@api_bp.route("/geolocator/query")
def geolocator_query():
    """GET /api/v1/geolocator/query?search=<free text>"""
    search = request.args.get("search", "").strip()
    if not search:
        return jsonify({"error": "search parameter is required"}), 400

    response = get_geolocator().locate(search)
    return jsonify({"_embedded": response.to_dict()})
