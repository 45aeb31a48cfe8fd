import logging

import pytest

from import_engine.csv_parser import map_row, prepare_reader, read_rows
from import_engine.report import ImportReport, RowStatus
from import_engine.row_processor import numbered_values, parse_flag, split_street_number


# ── csv_parser ─────────────────────────────────────────────────────────

def test_prepare_reader_strips_bom_and_headers():
    reader = prepare_reader(b"\xef\xbb\xbf account_name ; city\nAcme;Wien\n")
    assert reader.fieldnames == ["account_name", "city"]
    assert list(reader) == [{"account_name": "Acme", "city": "Wien"}]


@pytest.mark.parametrize("raw", [b"", "   \n", ""])
def test_prepare_reader_empty_content(raw):
    assert prepare_reader(raw) is None


def test_map_row_renames_and_cleans():
    row = {"Firma": " Acme ", "email1": None, None: ["surplus"]}
    assert map_row(row, {"Firma": "account_name"}) == {"account_name": "Acme", "email1": ""}


def test_read_rows_numbers_from_two(tmp_path):
    path = tmp_path / "accounts.csv"
    path.write_text("Firma;Ort\nAcme;Wien\nBeta;Graz\n", encoding="utf-8")

    rows = list(read_rows(path, {"Firma": "account_name"}))

    assert rows == [
        (2, {"account_name": "Acme", "Ort": "Wien"}),
        (3, {"account_name": "Beta", "Ort": "Graz"}),
    ]


# ── row_processor helpers ──────────────────────────────────────────────

def test_numbered_values_collects_in_order():
    row = {"email1": "a", "email2": "b", "email3": "c"}
    assert numbered_values(row, "email") == ["a", "b", "c"]


def test_numbered_values_warns_about_dropped_values(caplog):
    row = {"phone1": "1", "phone2": "", "phone4": "4"}
    with caplog.at_level(logging.WARNING):
        assert numbered_values(row, "phone") == ["1"]
    assert "phone4" in caplog.text


def test_numbered_values_ignores_suffix_ten():
    row = {f"fax{i}": str(i) for i in range(1, 11)}
    assert numbered_values(row, "fax") == [str(i) for i in range(1, 10)]


@pytest.mark.parametrize("street, expected", [
    ("Main Street 12a", ("Main Street", "12a")),
    ("Hauptstraße 5/3/12", ("Hauptstraße", "5/3/12")),
    ("Ringstrasse", ("Ringstrasse", "")),
])
def test_split_street_number(street, expected):
    assert split_street_number(street) == expected


@pytest.mark.parametrize("value, expected", [
    ("1", True), ("TRUE", True), (" yes ", True), ("on", True),
    ("0", False), ("no", False), ("", False),
])
def test_parse_flag(value, expected):
    assert parse_flag(value) is expected


# ── report ─────────────────────────────────────────────────────────────

def test_reference_errors_do_not_change_counters():
    report = ImportReport()
    report.add_imported("accounts", 2)
    report.add_error("accounts", 3, "boom")
    report.add_reference_error("accounts", 2, "parent account 'x' not found")

    assert (report.total_rows, report.imported, report.failed) == (2, 1, 1)
    assert len(report.errors) == 2
    assert report.results[1].status is RowStatus.ERROR
    assert report.results[1].to_dict() == {
        "file": "accounts", "row": 3, "status": "error", "reason": "boom",
    }


def test_read_rows_counts_blank_lines(tmp_path):
    path = tmp_path / "accounts.csv"
    path.write_text("account_id;account_name\n1;A\n\n2;B\n", encoding="utf-8")

    assert [idx for idx, _ in read_rows(path, {})] == [2, 4]


def test_read_rows_rejects_latin1(tmp_path):
    path = tmp_path / "accounts.csv"
    path.write_bytes("account_name;country\nAcme;Österreich\n".encode("cp1252"))

    with pytest.raises(UnicodeDecodeError):
        read_rows(path, {})
