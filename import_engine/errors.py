"""
import_engine.errors - Exception hierarchy for contact/account imports.

Fatal errors abort the whole run; RowError and EntityNotFoundError are
raised inside row processing and only fail the current row.
"""


class ContactImportError(Exception):
    """Base class for every import failure."""


class ImportFileNotFoundError(ContactImportError):
    """An account, contact or mappings file is missing."""

    def __init__(self, kind: str, path):
        super().__init__(f"{kind} file not found: {path}")
        self.kind = kind
        self.path = path


class ImportConfigurationError(ContactImportError):
    """Mappings file or type defaults cannot be used."""


class RowError(ContactImportError):
    """Raised when a row cannot be imported."""


class EntityNotFoundError(RowError):
    """A referenced record (e.g. a country code) does not exist."""

    def __init__(self, entity: str, key):
        super().__init__(f"{entity} '{key}' not found")
        self.entity = entity
        self.key = key


class ImportFileEncodingError(ContactImportError):
    """An account or contact file is not UTF-8."""

    def __init__(self, kind: str, path, reason: UnicodeDecodeError):
        super().__init__(
            f"{kind} file {path} is not valid UTF-8 (byte {reason.start}): "
            "export it as UTF-8 and retry")
        self.kind = kind
        self.path = path
