"""
import_engine.lookups - Name → record caches for shared reference rows.

Seeded from the datastore once, then extended with records created
during the run.  New records are staged until the row that created them
has been committed, so a rolled-back row never leaves a detached record
behind in the cache.
"""

from __future__ import annotations

import logging

from db.datastore import Datastore

logger = logging.getLogger(__name__)


class LookupCache:

    def __init__(self, datastore: Datastore, model: type, key_attr: str):
        self._datastore = datastore
        self._model = model
        self._key_attr = key_attr
        self._items: dict[str, object] = {}
        self._staged: dict[str, object] = {}
        self.reload()

    def reload(self) -> None:
        """Replace the cache contents with what the datastore holds."""
        self._items = {
            getattr(entity, self._key_attr): entity
            for entity in self._datastore.find_all(self._model)
        }
        self._staged.clear()

    def get_or_create(self, name: str):
        """Return the record for *name*, creating and persisting it if new."""
        if name in self._items:
            return self._items[name]
        if name in self._staged:
            return self._staged[name]

        entity = self._model(**{self._key_attr: name})
        self._datastore.persist(entity)
        self._staged[name] = entity
        logger.debug(f"New {self._model.__name__} '{name}'")
        return entity

    def commit(self) -> None:
        """Publish records created since the last commit/discard."""
        self._items.update(self._staged)
        self._staged.clear()

    def discard(self) -> None:
        self._staged.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def __len__(self) -> int:
        return len(self._items)
