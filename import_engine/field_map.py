"""
import_engine.field_map - Canonical column names and suffix conventions.

Column names listed here are what the row processor reads after the
mappings file has renamed the raw CSV headers.
"""

from db.models import Account

# Repeated columns are numbered email1 … email9.  Scanning stops at the
# first missing number.
MAX_SUFFIX = 9

# Default row-key column for the account index
DEFAULT_ID_MAPPINGS: dict[str, str] = {
    "account_id": "account_id",
}

DEFAULT_OPTIONS: dict[str, bool] = {
    "importIds": True,          # keep the file's row key on Account.import_id
    "streetNumberSplit": False, # "Main Street 12a" → street + number
}

# Account type constant → alias used in the file
DEFAULT_ACCOUNT_TYPE_MAPPINGS: dict[int, str] = {
    Account.TYPE_BASIC:    "",
    Account.TYPE_LEAD:     "lead",
    Account.TYPE_CUSTOMER: "customer",
    Account.TYPE_SUPPLIER: "supplier",
}

# Scalar account columns → Account attribute
ACCOUNT_FIELDS: dict[str, str] = {
    "account_division":       "division",
    "account_uid":            "uid",
    "account_registerNumber": "register_number",
}

# Scalar contact columns → Contact attribute
CONTACT_FIELDS: dict[str, str] = {
    "contact_title":         "title",
    "contact_position":      "position",
    "contact_formOfAddress": "form_of_address",
    "contact_salutation":    "salutation",
}

TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})

BIRTHDAY_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y")
