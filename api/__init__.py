"""
api - JSON API for contact imports and address lookup.

    POST /api/v1/import               multipart CSV/JSON upload → ImportReport
    GET  /api/v1/geolocator/query     ?search=<free text> → locations

Route modules attach to the one Blueprint defined here.
"""

from flask import Blueprint

api_bp = Blueprint("api", __name__, url_prefix="/api/v1")

from api import routes_import       # noqa: F401, E402
from api import routes_geolocator   # noqa: F401, E402
from api import errors              # noqa: F401, E402
