"""
db.seed - Load reference data (type records + countries) from YAML.

Idempotent: rows that already exist (by name, or by code for countries)
are left untouched, so the ids handed out on first run stay stable.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from sqlalchemy.orm import Session

from db.models import AddressType, Country, EmailType, FaxType, PhoneType, UrlType

logger = logging.getLogger(__name__)

# YAML key → model holding a plain list of names
_TYPE_SECTIONS = {
    "email_types":   EmailType,
    "phone_types":   PhoneType,
    "fax_types":     FaxType,
    "url_types":     UrlType,
    "address_types": AddressType,
}


def seed_reference_data(session: Session, path: str | Path) -> dict:
    """
    Insert missing type records and countries listed in *path*.

    Returns a stats dict {section: rows_added} for logging.
    """
    with open(path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    stats: dict[str, int] = {}

    for section, model in _TYPE_SECTIONS.items():
        existing = {row.name for row in session.query(model).all()}
        added = 0
        for name in data.get(section, []):
            if name in existing:
                continue
            session.add(model(name=name))
            existing.add(name)
            added += 1
        stats[section] = added

    known_codes = {c.code for c in session.query(Country).all()}
    added = 0
    for entry in data.get("countries", []):
        code = str(entry["code"]).upper()
        if code in known_codes:
            continue
        session.add(Country(code=code, name=entry.get("name", code)))
        known_codes.add(code)
        added += 1
    stats["countries"] = added

    session.commit()
    logger.info(f"Reference data seeded from {path}: {stats}")
    return stats
