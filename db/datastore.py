"""
db.datastore - Thin entity-manager facade over a SQLAlchemy Session.

The import engine talks to persistence only through this class, so it
can be handed any session (or a test double with the same methods).
Session lifetime stays with the caller.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session


class Datastore:

    def __init__(self, session: Session):
        self.session = session

    # ── Lookups ────────────────────────────────────────────────────────

    def find_all(self, model: type) -> list:
        return self.session.query(model).all()

    def find(self, model: type, entity_id: Any):
        return self.session.get(model, entity_id)

    def find_one_by_code(self, model: type, code: str):
        return self.session.query(model).filter_by(code=code).first()

    # ── Writes ─────────────────────────────────────────────────────────

    def persist(self, entity) -> None:
        self.session.add(entity)

    def flush(self) -> None:
        """Write pending changes and commit them as one unit of work."""
        self.session.flush()
        self.session.commit()

    def rollback(self) -> None:
        """Discard everything since the last flush()."""
        self.session.rollback()
