"""
import_engine.row_processor - Turn one mapped CSV row into an Account or Contact.

Single-responsibility: given a row dict (already renamed through the
mappings file) build the entity graph and hand it to the datastore, or
raise RowError.  Committing, indexing and reporting are the importer's job.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime

from db.datastore import Datastore
from db.models import (
    Account, Address, BankAccount, Contact, Country, Email, Fax, Note, Phone, Url,
)
from import_engine.errors import EntityNotFoundError, RowError
from import_engine.field_map import (
    ACCOUNT_FIELDS, BIRTHDAY_FORMATS, CONTACT_FIELDS, MAX_SUFFIX, TRUE_VALUES,
)
from import_engine.lookups import LookupCache
from import_engine.mappings import ImportMappings

logger = logging.getLogger(__name__)

_STREET_NUMBER = re.compile(r"^(\D+?)\s*(\d.*)$")


def has_value(row: dict, key: str) -> bool:
    """True if *key* is present and non-empty."""
    return bool(row.get(key))


def parse_flag(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


def split_street_number(street: str) -> tuple[str, str]:
    """'Main Street 12a' → ('Main Street', '12a').  No number → (street, '')."""
    match = _STREET_NUMBER.match(street.strip())
    if not match:
        return street.strip(), ""
    return match.group(1).strip(), match.group(2).strip()


def numbered_values(row: dict, prefix: str) -> list[str]:
    """
    Collect prefix1 … prefix9, stopping at the first missing number.
    Values after a gap are dropped with a warning.
    """
    values: list[str] = []
    for i in range(1, MAX_SUFFIX + 1):
        value = row.get(f"{prefix}{i}")
        if not value:
            dropped = [f"{prefix}{j}" for j in range(i + 1, MAX_SUFFIX + 1)
                       if has_value(row, f"{prefix}{j}")]
            if dropped:
                logger.warning(f"{prefix}{i} is empty, ignoring {', '.join(dropped)}")
            break
        values.append(value)
    return values


class RowProcessor:
    """
    Builds entities for one import run.  Holds references to the run's
    lookup caches and resolved type defaults; owns no state of its own.
    """

    def __init__(
        self,
        datastore: Datastore,
        mappings: ImportMappings,
        defaults: dict,
        categories: LookupCache,
        tags: LookupCache,
    ):
        self.datastore = datastore
        self.mappings = mappings
        self.defaults = defaults
        self.categories = categories
        self.tags = tags

    # ── Accounts ───────────────────────────────────────────────────────

    def account_row_key(self, row: dict) -> str | None:
        """Value of the row-key column, or None when no id mapping is set."""
        column = self.mappings.row_key_column
        if not column:
            return None
        if column not in row:
            raise RowError(f"no key '{column}' found in column definition of accounts file")
        return row[column] or None

    def process_account(self, row: dict, row_key: str | None = None) -> Account | None:
        """
        Build and persist an Account.  Returns None (skip) when the row
        has no account_name.
        """
        if not has_value(row, "account_name"):
            return None

        account = Account(name=row["account_name"])
        self.datastore.persist(account)

        if row_key and self.mappings.option("importIds"):
            account.import_id = row_key

        for column, attr in ACCOUNT_FIELDS.items():
            if has_value(row, column):
                setattr(account, attr, row[column])
        if has_value(row, "account_disabled"):
            account.disabled = parse_flag(row["account_disabled"])
        if has_value(row, "account_type"):
            account.type = self.mappings.map_account_type(row["account_type"])

        if has_value(row, "account_category"):
            account.category = self.categories.get_or_create(row["account_category"])
        if has_value(row, "account_tag"):
            account.tags.append(self.tags.get_or_create(row["account_tag"]))

        self._add_emails(row, account)
        self._add_phones(row, account)
        if has_value(row, "phone_isdn"):
            account.phones.append(
                Phone(phone=row["phone_isdn"], phone_type=self.defaults["phoneTypeIsdn"]))
        self._add_faxes(row, account)
        for value in numbered_values(row, "url"):
            account.urls.append(Url(url=value, url_type=self.defaults["urlType"]))

        # Accounts carry a single note; gaps in note1..9 are tolerated.
        note_values = [row[f"note{i}"] for i in range(1, MAX_SUFFIX + 1)
                       if has_value(row, f"note{i}")]
        if note_values:
            account.notes.append(Note(value="\n".join(note_values)))

        self._add_address(row, account)
        self._add_bank_accounts(row, account)
        return account

    # ── Contacts ───────────────────────────────────────────────────────

    def process_contact(self, row: dict, accounts: dict[str, Account]) -> Contact | None:
        """
        Build and persist a Contact.  *accounts* is the row-key index from
        the account pass.  Returns None (skip) when both names are missing.
        """
        if not (has_value(row, "contact_firstname") or has_value(row, "contact_lastname")):
            return None

        contact = Contact(
            first_name=row.get("contact_firstname", ""),
            last_name=row.get("contact_lastname", ""),
        )
        self.datastore.persist(contact)

        for column, attr in CONTACT_FIELDS.items():
            if has_value(row, column):
                setattr(contact, attr, row[column])
        if has_value(row, "contact_birthday"):
            contact.birthday = self._parse_birthday(row["contact_birthday"])
        if has_value(row, "contact_disabled"):
            contact.disabled = parse_flag(row["contact_disabled"])
        if has_value(row, "contact_tag"):
            contact.tags.append(self.tags.get_or_create(row["contact_tag"]))

        if has_value(row, "contact_parent"):
            account = accounts.get(row["contact_parent"])
            if account is None:
                logger.warning(
                    f"Contact '{contact.full_name}': parent account "
                    f"'{row['contact_parent']}' not found in accounts file")
            else:
                contact.account = account

        self._add_address(row, contact)
        self._add_emails(row, contact)
        self._add_phones(row, contact)
        if has_value(row, "phone_mobile"):
            contact.phones.append(
                Phone(phone=row["phone_mobile"], phone_type=self.defaults["phoneTypeMobile"]))
        self._add_faxes(row, contact)
        for value in numbered_values(row, "note"):
            contact.notes.append(Note(value=value))
        return contact

    # ── Shared value objects ───────────────────────────────────────────

    def _add_emails(self, row: dict, entity):
        for value in numbered_values(row, "email"):
            entity.emails.append(Email(email=value, email_type=self.defaults["emailType"]))

    def _add_phones(self, row: dict, entity):
        for value in numbered_values(row, "phone"):
            entity.phones.append(Phone(phone=value, phone_type=self.defaults["phoneType"]))

    def _add_faxes(self, row: dict, entity):
        for value in numbered_values(row, "fax"):
            entity.faxes.append(Fax(fax=value, fax_type=self.defaults["faxType"]))

    def _add_address(self, row: dict, entity):
        """Attach an address only when both city and country resolve."""
        street = row.get("street", "")
        number = row.get("number", "")
        if street and self.mappings.option("streetNumberSplit"):
            street, split_number = split_street_number(street)
            number = split_number or number

        country = None
        if has_value(row, "country"):
            country = self._resolve_country(row["country"])

        if not (has_value(row, "city") and country is not None):
            return

        entity.addresses.append(Address(
            street=street or None,
            number=number or None,
            zip=row.get("zip") or None,
            city=row["city"],
            country=country,
            address_type=self.defaults["addressType"],
        ))

    def _resolve_country(self, value: str) -> Country:
        code = self.mappings.map_country_code(value)
        country = self.datastore.find_one_by_code(Country, code)
        if country is None:
            raise EntityNotFoundError("Country", value)
        return country

    def _add_bank_accounts(self, row: dict, account: Account):
        """ibanN → BankAccount; a legacy blzN without IBAN goes into the note."""
        for i in range(1, MAX_SUFFIX + 1):
            if has_value(row, f"iban{i}"):
                account.bank_accounts.append(BankAccount(
                    iban=row[f"iban{i}"],
                    bic=row.get(f"bic{i}") or None,
                    bank_name=row.get(f"bank{i}") or None,
                    public=parse_flag(row.get(f"bank_public{i}", "")),
                ))
            elif has_value(row, f"blz{i}"):
                self._append_legacy_bank_note(row, i, account)

    @staticmethod
    def _append_legacy_bank_note(row: dict, i: int, account: Account):
        text = f"Old Bank Account: BLZ: {row[f'blz{i}']}"
        if has_value(row, f"accountNumber{i}"):
            text += f"; Account-Number: {row[f'accountNumber{i}']}"
        if has_value(row, f"bank{i}"):
            text += f"; Bank-Name: {row[f'bank{i}']}"

        if account.notes:
            note = account.notes[0]
            note.value = f"{note.value}\n{text}"
        else:
            account.notes.append(Note(value=text))

    @staticmethod
    def _parse_birthday(value: str) -> date:
        for fmt in BIRTHDAY_FORMATS:
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue
        raise RowError(f"invalid contact_birthday {value!r}")
