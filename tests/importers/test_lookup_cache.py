from db.models import Tag
from import_engine.lookups import LookupCache
from tests.factories import TagFactory


def test_seeded_from_datastore(datastore):
    TagFactory(name="VIP")
    cache = LookupCache(datastore, Tag, "name")

    assert "VIP" in cache
    assert len(cache) == 1


def test_new_entries_are_staged_until_commit(datastore):
    cache = LookupCache(datastore, Tag, "name")

    first = cache.get_or_create("Partner")
    assert cache.get_or_create("Partner") is first
    assert "Partner" not in cache

    cache.commit()
    assert "Partner" in cache
    assert cache.get_or_create("Partner") is first


def test_discard_drops_staged_entries(datastore):
    cache = LookupCache(datastore, Tag, "name")

    first = cache.get_or_create("Partner")
    datastore.rollback()
    cache.discard()

    second = cache.get_or_create("Partner")
    assert second is not first
    assert "Partner" not in cache
