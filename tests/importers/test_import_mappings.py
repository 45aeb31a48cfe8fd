import json

import pytest

from db.models import Account
from import_engine import ImportConfigurationError, ImportMappings


def test_defaults():
    mappings = ImportMappings()
    assert mappings.row_key_column == "account_id"
    assert mappings.option("importIds") is True
    assert mappings.option("streetNumberSplit") is False
    assert mappings.header_map() == {}


def test_load_merges_options_over_defaults(tmp_path):
    path = tmp_path / "mappings.json"
    path.write_text(json.dumps({"options": {"streetNumberSplit": True}}), encoding="utf-8")

    mappings = ImportMappings.load(path)

    assert mappings.option("streetNumberSplit") is True
    assert mappings.option("importIds") is True


def test_header_map_inverts_columns_first_key_wins():
    mappings = ImportMappings.from_dict({
        "columns": {"account_name": "Firma", "contact_lastname": "Firma", "city": "Ort"},
    })
    assert mappings.header_map() == {"Firma": "account_name", "Ort": "city"}


def test_ids_section_replaces_row_key():
    mappings = ImportMappings.from_dict({"ids": {"account_id": "Customer No"}})
    assert mappings.row_key_column == "Customer No"

    assert ImportMappings.from_dict({"ids": {}}).row_key_column is None


def test_country_alias_lookup():
    mappings = ImportMappings.from_dict({"countries": {"AT": "Österreich", "DE": "Deutschland"}})
    assert mappings.map_country_code("Deutschland") == "DE"
    assert mappings.map_country_code("ch") == "CH"


def test_account_type_lookup():
    mappings = ImportMappings()
    assert mappings.map_account_type("supplier") == Account.TYPE_SUPPLIER
    assert mappings.map_account_type("lead") == Account.TYPE_LEAD
    assert mappings.map_account_type("whatever") == Account.TYPE_BASIC

    custom = ImportMappings.from_dict({"accountTypes": {"1": "Interessent"}})
    assert custom.map_account_type("Interessent") == Account.TYPE_LEAD
    assert custom.map_account_type("lead") == Account.TYPE_BASIC


@pytest.mark.parametrize("content", ["{broken", "", "[]", "{}", "null"])
def test_load_rejects_unusable_documents(tmp_path, content):
    path = tmp_path / "mappings.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ImportConfigurationError):
        ImportMappings.load(path)


@pytest.mark.parametrize("data", [
    {"columns": ["account_name"]},
    {"options": "yes"},
    {"accountTypes": {"customer": "Kunde"}},
])
def test_from_dict_rejects_bad_sections(data):
    with pytest.raises(ImportConfigurationError):
        ImportMappings.from_dict(data)


def test_load_rejects_non_utf8_file(tmp_path):
    path = tmp_path / "mappings.json"
    path.write_bytes(b'{"columns": {"account_name": "Firma\xff"}}')

    with pytest.raises(ImportConfigurationError, match="no valid JSON"):
        ImportMappings.load(path)
