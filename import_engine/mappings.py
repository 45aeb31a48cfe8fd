"""
import_engine.mappings - The per-run mappings file.

JSON layout (every section optional):

    {
      "columns":      {"account_name": "Company", ...},   canonical → CSV header
      "ids":          {"account_id": "Customer No"},      row-key column
      "options":      {"importIds": true, "streetNumberSplit": false},
      "countries":    {"AT": "Österreich", ...},          code → alias in file
      "accountTypes": {"2": "Kunde", ...}                 type constant → alias
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from db.models import Account
from import_engine.errors import ImportConfigurationError
from import_engine.field_map import (
    DEFAULT_ACCOUNT_TYPE_MAPPINGS,
    DEFAULT_ID_MAPPINGS,
    DEFAULT_OPTIONS,
)


@dataclass
class ImportMappings:
    columns: dict[str, str] = field(default_factory=dict)
    ids: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ID_MAPPINGS))
    options: dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_OPTIONS))
    countries: dict[str, str] = field(default_factory=dict)
    account_types: dict[int, str] = field(
        default_factory=lambda: dict(DEFAULT_ACCOUNT_TYPE_MAPPINGS))

    # ── Loading ────────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> "ImportMappings":
        """Parse a mappings file.  Raises ImportConfigurationError."""
        try:
            with open(path, encoding="utf-8-sig") as fh:
                data = json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ImportConfigurationError(
                f"no valid JSON in mappings file {path}: {exc}") from exc

        if not data or not isinstance(data, dict):
            raise ImportConfigurationError(f"no valid JSON in mappings file {path}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "ImportMappings":
        mappings = cls()
        if "columns" in data:
            mappings.columns = _section(data, "columns")
        if "ids" in data:
            mappings.ids = _section(data, "ids")
        if "options" in data:
            mappings.options = {**DEFAULT_OPTIONS, **_section(data, "options")}
        if "countries" in data:
            mappings.countries = _section(data, "countries")
        if "accountTypes" in data:
            mappings.account_types = {
                _type_constant(k): v for k, v in _section(data, "accountTypes").items()
            }
        return mappings

    # ── Lookups ────────────────────────────────────────────────────────

    @property
    def row_key_column(self) -> str | None:
        """CSV column whose value keys the account index, if any."""
        return self.ids.get("account_id")

    def option(self, name: str) -> bool:
        return bool(self.options.get(name, DEFAULT_OPTIONS.get(name, False)))

    def header_map(self) -> dict[str, str]:
        """Invert `columns` to CSV header → canonical name (first key wins)."""
        inverted: dict[str, str] = {}
        for canonical, header in self.columns.items():
            inverted.setdefault(header, canonical)
        return inverted

    def map_country_code(self, value: str) -> str:
        for code, alias in self.countries.items():
            if alias == value:
                return code
        return value.upper()

    def map_account_type(self, value: str) -> int:
        for type_const, alias in self.account_types.items():
            if alias == value:
                return type_const
        return Account.TYPE_BASIC


def _section(data: dict, key: str) -> dict:
    value = data[key]
    if not isinstance(value, dict):
        raise ImportConfigurationError(f"mappings section '{key}' must be an object")
    return value


def _type_constant(key) -> int:
    try:
        return int(key)
    except (TypeError, ValueError):
        raise ImportConfigurationError(
            f"accountTypes key {key!r} is not an account type constant") from None
