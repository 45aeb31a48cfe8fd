"""
import_engine.importer - Top-level orchestrator.

Coordinates mappings file → csv_parser → row_processor → per-row commit
and produces a structured ImportReport.

Accounts are read once; `account_parent` references are collected while
reading and resolved afterwards against the complete row-key index, so
a child may appear before its parent.  Contacts are read after accounts
and link to the same index through `contact_parent`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, Optional

import config
from db.datastore import Datastore
from db.engine import session_scope
from db.models import (
    Account, AccountCategory, AddressType, EmailType, FaxType, PhoneType, Tag, UrlType,
)
from import_engine.csv_parser import read_rows
from import_engine.errors import (
    ImportConfigurationError, ImportFileEncodingError, ImportFileNotFoundError,
)
from import_engine.lookups import LookupCache
from import_engine.mappings import ImportMappings
from import_engine.report import ImportReport
from import_engine.row_processor import RowProcessor, has_value

logger = logging.getLogger(__name__)

ACCOUNTS = "accounts"
CONTACTS = "contacts"

# type_defaults key → reference model
TYPE_DEFAULT_MODELS: dict[str, type] = {
    "emailType":       EmailType,
    "phoneType":       PhoneType,
    "phoneTypeIsdn":   PhoneType,
    "phoneTypeMobile": PhoneType,
    "addressType":     AddressType,
    "urlType":         UrlType,
    "faxType":         FaxType,
}


@dataclass
class DeferredParent:
    account: Account
    parent_key: str
    row: int


class ContactImport:
    """
    Configures and executes an import of account and contact data.

    The instance owns every piece of run state: the category/tag caches
    (seeded from the datastore here), the account row-key index and the
    deferred parent references.
    """

    def __init__(self, datastore: Datastore, type_defaults: dict):
        self.datastore = datastore
        self.type_defaults = type_defaults

        self.account_file: Optional[str | Path] = None
        self.contact_file: Optional[str | Path] = None
        self.mappings_file: Optional[str | Path] = None
        self.limit: Optional[int] = None

        self.mappings = ImportMappings()
        self.defaults: dict = {}
        self.accounts: dict[str, Account] = {}
        self.categories = LookupCache(datastore, AccountCategory, "category")
        self.tags = LookupCache(datastore, Tag, "name")

        self._deferred: list[DeferredParent] = []

    # ── Public API ─────────────────────────────────────────────────────

    def execute(self) -> ImportReport:
        """
        Run the import.  Row failures land in the report; anything that
        escapes (missing files, bad configuration, …) is logged and re-raised.
        """
        try:
            self._check_files()
            self.defaults = self._resolve_type_defaults()
            if self.mappings_file:
                self.mappings = ImportMappings.load(self.mappings_file)

            # Both files are decoded before the first row is written
            account_rows = self._read_csv(self.account_file, ACCOUNTS)
            contact_rows = None
            if self.contact_file:
                contact_rows = self._read_csv(self.contact_file, CONTACTS)

            report = ImportReport()
            processor = RowProcessor(
                self.datastore, self.mappings, self.defaults, self.categories, self.tags,
            )

            self._process_account_file(account_rows, processor, report)
            if self.contact_file:
                self._process_contact_file(contact_rows, processor, report)

            logger.info(
                f"Import finished: {report.imported} imported, {report.skipped} skipped, "
                f"{report.failed} failed / {report.total_rows} rows")
            return report
        except Exception:
            logger.exception("Import aborted")
            raise

    def get_account_by_key(self, key: str) -> Account | None:
        return self.accounts.get(key)

    # ── File passes ────────────────────────────────────────────────────

    def _process_account_file(self, rows, processor: RowProcessor, report: ImportReport):
        def create_account(row: dict) -> Account | None:
            return processor.process_account(row, processor.account_row_key(row))

        def index_account(account: Account, row: dict, row_idx: int):
            key = processor.account_row_key(row)
            if key:
                self.accounts[key] = account
            if has_value(row, "account_parent"):
                self._deferred.append(DeferredParent(account, row["account_parent"], row_idx))

        self._process_csv_loop(
            rows, ACCOUNTS, "account_name", create_account, report,
            on_commit=index_account,
        )
        self._resolve_parents(report)

    def _process_contact_file(self, rows, processor: RowProcessor, report: ImportReport):
        self._process_csv_loop(
            rows, CONTACTS, "contact_firstname/contact_lastname",
            lambda row: processor.process_contact(row, self.accounts), report,
        )

    def _process_csv_loop(
        self,
        rows: Optional[Iterator[tuple[int, dict]]],
        kind: str,
        required: str,
        handler: Callable[[dict], object],
        report: ImportReport,
        on_commit: Optional[Callable[[object, dict, int], None]] = None,
    ):
        """
        Feed every data row through *handler* and commit it.  *rows* is
        None for a file without a header row.

        *handler* returns the created entity, or None to skip the row.
        *on_commit* runs only for rows that reached the database.
        """
        if rows is None:
            report.add_reference_error(kind, 0, "CSV has no header row or is empty")
            logger.warning(f"{kind} file is empty")
            return

        processed = 0
        for row_idx, row in rows:
            if self.limit is not None and processed >= self.limit:
                break
            processed += 1

            try:
                entity = handler(row)
                if entity is None:
                    report.add_skipped(kind, row_idx, f"{required} not set")
                    logger.debug(f"{kind} row {row_idx}: {required} not set, skipped")
                    continue
                self.datastore.flush()
            except Exception as exc:
                self.datastore.rollback()
                self.categories.discard()
                self.tags.discard()
                report.add_error(kind, row_idx, str(exc))
                logger.warning(f"Error while processing {kind} row {row_idx}: {exc}")
                continue

            self.categories.commit()
            self.tags.commit()
            if on_commit is not None:
                on_commit(entity, row, row_idx)
            report.add_imported(kind, row_idx)

    def _resolve_parents(self, report: ImportReport):
        """Link every deferred account_parent now that all accounts exist."""
        for ref in self._deferred:
            parent = self.accounts.get(ref.parent_key)
            if parent is None:
                reason = f"parent account '{ref.parent_key}' not found"
                report.add_reference_error(ACCOUNTS, ref.row, reason)
                logger.warning(f"accounts row {ref.row}: {reason}")
                continue
            try:
                ref.account.parent = parent
                self.datastore.flush()
            except Exception as exc:
                self.datastore.rollback()
                report.add_reference_error(ACCOUNTS, ref.row, str(exc))
                logger.warning(f"Error while linking parent of accounts row {ref.row}: {exc}")
        self._deferred.clear()

    # ── Setup helpers ──────────────────────────────────────────────────

    def _read_csv(self, path, kind: str):
        try:
            return read_rows(path, self.mappings.header_map())
        except UnicodeDecodeError as exc:
            raise ImportFileEncodingError(kind, path, exc) from exc

    def _check_files(self):
        if not self.account_file or not Path(self.account_file).is_file():
            raise ImportFileNotFoundError("accounts", self.account_file)
        if self.mappings_file and not Path(self.mappings_file).is_file():
            raise ImportFileNotFoundError("mappings", self.mappings_file)
        if self.contact_file and not Path(self.contact_file).is_file():
            raise ImportFileNotFoundError("contacts", self.contact_file)

    def _resolve_type_defaults(self) -> dict:
        """Load the reference record behind every configured type default."""
        defaults: dict = {}
        for key, model in TYPE_DEFAULT_MODELS.items():
            entity_id = self.type_defaults.get(key)
            if entity_id is None:
                raise ImportConfigurationError(f"type default '{key}' is not configured")
            entity = self.datastore.find(model, entity_id)
            if entity is None:
                raise ImportConfigurationError(
                    f"type default '{key}' refers to unknown {model.__name__} {entity_id}")
            defaults[key] = entity
        return defaults


def run_import(
    account_file: str | Path,
    contact_file: str | Path | None = None,
    mappings_file: str | Path | None = None,
    *,
    limit: int | None = None,
    type_defaults: dict | None = None,
) -> ImportReport:
    """
    Import account (and optionally contact) CSV files into the database.

    Opens its own session; fatal errors propagate to the caller.
    """
    with session_scope() as session:
        importer = ContactImport(Datastore(session), type_defaults or config.TYPE_DEFAULTS)
        importer.account_file = account_file
        importer.contact_file = contact_file
        importer.mappings_file = mappings_file
        importer.limit = limit
        return importer.execute()
