import csv

import pytest

import config
from db import Datastore, get_session, init_db, seed_reference_data, session_scope
from import_engine import ContactImport
from tests import factories


@pytest.fixture
def db_url(tmp_path):
    """URL of a fresh SQLite database file for one test."""
    return f"sqlite:///{tmp_path / 'contactdb-test.sqlite'}"


@pytest.fixture
def session(db_url):
    """Session on a database seeded with the reference types and countries."""
    init_db(db_url)
    s = get_session()
    seed_reference_data(s, config.REFERENCE_DATA_PATH)
    factories.bind_session(s)
    yield s
    s.close()


@pytest.fixture
def datastore(session):
    return Datastore(session)


@pytest.fixture
def make_import(datastore):
    """Build a ContactImport wired to the test datastore."""
    def _make(account_file, contact_file=None, mappings_file=None, limit=None):
        importer = ContactImport(datastore, dict(config.TYPE_DEFAULTS))
        importer.account_file = account_file
        importer.contact_file = contact_file
        importer.mappings_file = mappings_file
        importer.limit = limit
        return importer
    return _make


@pytest.fixture
def write_csv(tmp_path):
    """Write a semicolon-separated CSV: write_csv(name, header, *rows)."""
    def _write(name, header, *rows):
        path = tmp_path / name
        with open(path, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh, delimiter=";")
            writer.writerow(header)
            writer.writerows(rows)
        return path
    return _write


@pytest.fixture
def write_json(tmp_path):
    def _write(name, text):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def app(db_url):
    from main import create_app

    flask_app = create_app(db_url)
    flask_app.config["TESTING"] = True
    with session_scope() as s:
        seed_reference_data(s, config.REFERENCE_DATA_PATH)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
