from db import seed_reference_data
from db.models import Country, PhoneType

import config


def test_seed_is_idempotent(session):
    """The session fixture has seeded once already; a second run adds nothing."""
    stats = seed_reference_data(session, config.REFERENCE_DATA_PATH)

    assert all(count == 0 for count in stats.values())
    assert [t.name for t in session.query(PhoneType).order_by(PhoneType.id)] == \
        ["Work", "Mobile", "ISDN", "Private"]


def test_seed_countries(session):
    assert session.get(Country, 1).code == "AT"
    assert session.query(Country).filter_by(code="NO").one().name == "Norway"


def test_seed_adds_missing_rows(session, tmp_path):
    path = tmp_path / "extra.yaml"
    path.write_text(
        "phone_types: [Work, Pager]\ncountries:\n  - {code: xk, name: Kosovo}\n",
        encoding="utf-8",
    )

    stats = seed_reference_data(session, path)

    assert stats["phone_types"] == 1
    assert stats["countries"] == 1
    assert session.query(Country).filter_by(code="XK").one().name == "Kosovo"
