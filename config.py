"""
contactdb - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


def _optional_int(name: str) -> int | None:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else None


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR            = Path(__file__).resolve().parent
REFERENCE_DATA_PATH = Path(os.environ.get("CONTACTDB_REFERENCE_DATA",
                                          BASE_DIR / "reference_data.yaml"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("CONTACTDB_DB", f"sqlite:///{BASE_DIR / 'contactdb.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("CONTACTDB_HOST", "0.0.0.0")
PORT   = int(os.environ.get("CONTACTDB_PORT", "5000"))
DEBUG  = os.environ.get("CONTACTDB_DEBUG", "0") == "1"
SECRET = os.environ.get("CONTACTDB_SECRET", "contactdb-dev-key-change-in-prod")

# ── Import ─────────────────────────────────────────────────────────────
IMPORT_LIMIT  = _optional_int("CONTACTDB_IMPORT_LIMIT")
CSV_DELIMITER = ";"

# Reference-record ids injected into every new value object of that kind.
# The ids match the order of the lists in reference_data.yaml.
TYPE_DEFAULTS: dict[str, int] = {
    "emailType":       1,
    "phoneType":       1,
    "phoneTypeIsdn":   3,
    "phoneTypeMobile": 2,
    "addressType":     1,
    "urlType":         1,
    "faxType":         1,
}

# ── Geolocator ─────────────────────────────────────────────────────────
GEOLOCATOR_URL     = os.environ.get("GEOLOCATOR_URL",
                                    "https://www.mapquestapi.com/geocoding/v1/address")
GEOLOCATOR_KEY     = os.environ.get("GEOLOCATOR_KEY", "")
GEOLOCATOR_TIMEOUT = float(os.environ.get("GEOLOCATOR_TIMEOUT", "15"))
