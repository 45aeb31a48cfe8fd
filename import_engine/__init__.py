"""
import_engine - CSV import pipeline for accounts and contacts.

Public API:
    ContactImport(datastore, type_defaults).execute() → ImportReport
    run_import(account_file, contact_file=None, mappings_file=None, limit=None)
"""

from import_engine.importer import ContactImport, run_import          # noqa: F401
from import_engine.mappings import ImportMappings                     # noqa: F401
from import_engine.report import ImportReport, RowResult, RowStatus   # noqa: F401
from import_engine.errors import (                                    # noqa: F401
    ContactImportError,
    EntityNotFoundError,
    ImportConfigurationError,
    ImportFileEncodingError,
    ImportFileNotFoundError,
    RowError,
)
