"""
db.models - SQLAlchemy ORM declarations.

Tables
------
accounts            - organisations; self-referencing parent hierarchy.
contacts            - people, optionally linked to one account.
account_categories  - shared lookup, one row per category name.
tags                - shared lookup, many-to-many with accounts/contacts.
countries           - ISO country codes, resolved by code on import.
*_types             - reference records injected as type defaults.
emails, phones, faxes, urls, notes, addresses, bank_accounts
                    - value objects owned by either an account or a contact.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Table, Text,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


# ── Association tables ─────────────────────────────────────────────────

account_tags = Table(
    "account_tags", Base.metadata,
    Column("account_id", ForeignKey("accounts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

contact_tags = Table(
    "contact_tags", Base.metadata,
    Column("contact_id", ForeignKey("contacts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


# ── Reference data ─────────────────────────────────────────────────────

class Country(Base):
    __tablename__ = "countries"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    code = Column(String(5), nullable=False, unique=True, index=True)


class EmailType(Base):
    __tablename__ = "email_types"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


class PhoneType(Base):
    __tablename__ = "phone_types"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


class FaxType(Base):
    __tablename__ = "fax_types"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


class UrlType(Base):
    __tablename__ = "url_types"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


class AddressType(Base):
    __tablename__ = "address_types"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)


class AccountCategory(Base):
    __tablename__ = "account_categories"

    id       = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String(200), nullable=False, unique=True)


class Tag(Base):
    __tablename__ = "tags"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, unique=True)


# ── Owners ─────────────────────────────────────────────────────────────

class Account(Base):
    __tablename__ = "accounts"

    TYPE_BASIC    = 0
    TYPE_LEAD     = 1
    TYPE_CUSTOMER = 2
    TYPE_SUPPLIER = 3

    id              = Column(Integer, primary_key=True, autoincrement=True)
    name            = Column(String(300), nullable=False, index=True)
    type            = Column(Integer, nullable=False, default=TYPE_BASIC)
    division        = Column(String(300))
    disabled        = Column(Boolean, nullable=False, default=False)
    uid             = Column(String(100))
    register_number = Column(String(100))
    import_id       = Column(String(100), index=True)    # row key from the import file

    parent_id   = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("account_categories.id"), nullable=True)

    created = Column(DateTime, default=_now)
    changed = Column(DateTime, default=_now, onupdate=_now)

    parent   = relationship("Account", remote_side=[id], back_populates="children")
    children = relationship("Account", back_populates="parent")
    category = relationship("AccountCategory")
    tags     = relationship("Tag", secondary=account_tags)
    contacts = relationship("Contact", back_populates="account")

    emails        = relationship("Email", back_populates="account", cascade="all, delete-orphan")
    phones        = relationship("Phone", back_populates="account", cascade="all, delete-orphan")
    faxes         = relationship("Fax", back_populates="account", cascade="all, delete-orphan")
    urls          = relationship("Url", back_populates="account", cascade="all, delete-orphan")
    notes         = relationship("Note", back_populates="account", cascade="all, delete-orphan",
                                 order_by="Note.id")
    addresses     = relationship("Address", back_populates="account", cascade="all, delete-orphan")
    bank_accounts = relationship("BankAccount", back_populates="account",
                                 cascade="all, delete-orphan")


class Contact(Base):
    __tablename__ = "contacts"

    id              = Column(Integer, primary_key=True, autoincrement=True)
    first_name      = Column(String(100), nullable=False, default="")
    last_name       = Column(String(100), nullable=False, default="")
    title           = Column(String(100))
    position        = Column(String(100))
    form_of_address = Column(String(50))
    salutation      = Column(String(200))
    birthday        = Column(Date)
    disabled        = Column(Boolean, nullable=False, default=False)

    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)

    created = Column(DateTime, default=_now)
    changed = Column(DateTime, default=_now, onupdate=_now)

    account = relationship("Account", back_populates="contacts")
    tags    = relationship("Tag", secondary=contact_tags)

    emails    = relationship("Email", back_populates="contact", cascade="all, delete-orphan")
    phones    = relationship("Phone", back_populates="contact", cascade="all, delete-orphan")
    faxes     = relationship("Fax", back_populates="contact", cascade="all, delete-orphan")
    notes     = relationship("Note", back_populates="contact", cascade="all, delete-orphan",
                             order_by="Note.id")
    addresses = relationship("Address", back_populates="contact", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


# ── Value objects ──────────────────────────────────────────────────────
# Each belongs to exactly one account or one contact.

class Email(Base):
    __tablename__ = "emails"

    id            = Column(Integer, primary_key=True, autoincrement=True)
    email         = Column(String(300), nullable=False)
    email_type_id = Column(Integer, ForeignKey("email_types.id"), nullable=False)
    account_id    = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True)
    contact_id    = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), index=True)

    email_type = relationship("EmailType")
    account    = relationship("Account", back_populates="emails")
    contact    = relationship("Contact", back_populates="emails")


class Phone(Base):
    __tablename__ = "phones"

    id            = Column(Integer, primary_key=True, autoincrement=True)
    phone         = Column(String(100), nullable=False)
    phone_type_id = Column(Integer, ForeignKey("phone_types.id"), nullable=False)
    account_id    = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True)
    contact_id    = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), index=True)

    phone_type = relationship("PhoneType")
    account    = relationship("Account", back_populates="phones")
    contact    = relationship("Contact", back_populates="phones")


class Fax(Base):
    __tablename__ = "faxes"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    fax         = Column(String(100), nullable=False)
    fax_type_id = Column(Integer, ForeignKey("fax_types.id"), nullable=False)
    account_id  = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True)
    contact_id  = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), index=True)

    fax_type = relationship("FaxType")
    account  = relationship("Account", back_populates="faxes")
    contact  = relationship("Contact", back_populates="faxes")


class Url(Base):
    __tablename__ = "urls"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    url         = Column(Text, nullable=False)
    url_type_id = Column(Integer, ForeignKey("url_types.id"), nullable=False)
    account_id  = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True)

    url_type = relationship("UrlType")
    account  = relationship("Account", back_populates="urls")


class Note(Base):
    __tablename__ = "notes"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    value      = Column(Text, nullable=False, default="")
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True)
    contact_id = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), index=True)

    account = relationship("Account", back_populates="notes")
    contact = relationship("Contact", back_populates="notes")


class Address(Base):
    __tablename__ = "addresses"

    id              = Column(Integer, primary_key=True, autoincrement=True)
    street          = Column(String(300))
    number          = Column(String(50))
    zip             = Column(String(20))
    city            = Column(String(200), nullable=False)
    country_id      = Column(Integer, ForeignKey("countries.id"), nullable=False)
    address_type_id = Column(Integer, ForeignKey("address_types.id"), nullable=False)
    account_id      = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True)
    contact_id      = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), index=True)

    country      = relationship("Country")
    address_type = relationship("AddressType")
    account      = relationship("Account", back_populates="addresses")
    contact      = relationship("Contact", back_populates="addresses")


class BankAccount(Base):
    __tablename__ = "bank_accounts"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    iban       = Column(String(50), nullable=False)
    bic        = Column(String(20))
    bank_name  = Column(String(200))
    public     = Column(Boolean, nullable=False, default=False)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True)

    account = relationship("Account", back_populates="bank_accounts")
