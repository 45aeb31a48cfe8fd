"""
api.routes_import - /api/v1/import endpoint.

Accepts the account CSV (plus optional contact CSV and mappings JSON)
as a multipart upload and runs one import over them.
"""

import tempfile
from pathlib import Path

from flask import request, jsonify

from api import api_bp
from import_engine import run_import

# multipart field → file name inside the upload directory
_UPLOAD_FIELDS = {
    "accounts_file": "accounts.csv",
    "contacts_file": "contacts.csv",
    "mappings_file": "mappings.json",
}


@api_bp.route("/import", methods=["POST"])
def api_import_contacts():
    """
    POST /api/v1/import?limit=N

    Multipart fields: 'accounts_file' (required), 'contacts_file',
    'mappings_file'.
    """
    if "accounts_file" not in request.files:
        return jsonify({"error": "no accounts_file in upload"}), 400

    limit_raw = request.values.get("limit", "").strip()
    if limit_raw and not limit_raw.isdigit():
        return jsonify({"error": "limit must be a positive integer"}), 400
    limit = int(limit_raw) if limit_raw else None

    with tempfile.TemporaryDirectory(prefix="contactdb-import-") as tmp:
        paths: dict[str, Path | None] = {}
        for field, filename in _UPLOAD_FIELDS.items():
            upload = request.files.get(field)
            if upload is None or not upload.filename:
                paths[field] = None
                continue
            target = Path(tmp) / filename
            upload.save(target)
            paths[field] = target

        report = run_import(
            paths["accounts_file"],
            paths["contacts_file"],
            paths["mappings_file"],
            limit=limit,
        )

    return jsonify(report.to_dict())
