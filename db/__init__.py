"""
db - Database layer.

Public API:
    init_db()               → create engine + tables
    get_session()           → new Session
    session_scope()         → context manager closing its Session
    Datastore               → entity-manager facade used by the importer
    seed_reference_data()   → load types + countries from YAML
    Account, Contact, …     → ORM models
"""

from db.engine import init_db, get_session, session_scope   # noqa: F401
from db.datastore import Datastore                  # noqa: F401
from db.seed import seed_reference_data             # noqa: F401
from db.models import (                             # noqa: F401
    Base,
    Account,
    AccountCategory,
    Address,
    AddressType,
    BankAccount,
    Contact,
    Country,
    Email,
    EmailType,
    Fax,
    FaxType,
    Note,
    Phone,
    PhoneType,
    Tag,
    Url,
    UrlType,
)
