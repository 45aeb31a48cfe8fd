import factory
from factory.alchemy import SQLAlchemyModelFactory

from db.models import Account, AccountCategory, Country, Tag


class _ModelFactory(SQLAlchemyModelFactory):
    """Base factory; the session is bound per test by bind_session()."""

    class Meta:
        abstract = True
        sqlalchemy_session_persistence = "commit"


class AccountCategoryFactory(_ModelFactory):
    """Factory for creating AccountCategory rows."""

    class Meta:
        model = AccountCategory

    category = factory.Sequence(lambda n: f"Category{n}")


class TagFactory(_ModelFactory):
    """Factory for creating Tag rows."""

    class Meta:
        model = Tag

    name = factory.Sequence(lambda n: f"tag{n}")


class CountryFactory(_ModelFactory):
    """Factory for creating Country rows outside the seeded list."""

    class Meta:
        model = Country

    code = factory.Sequence(lambda n: f"Q{n}")
    name = factory.Sequence(lambda n: f"Testland {n}")


class AccountFactory(_ModelFactory):
    """Factory for creating Account rows."""

    class Meta:
        model = Account

    name = factory.Sequence(lambda n: f"Account {n}")
    type = Account.TYPE_BASIC


ALL_FACTORIES = (AccountCategoryFactory, TagFactory, CountryFactory, AccountFactory)


def bind_session(session):
    for f in ALL_FACTORIES:
        f._meta.sqlalchemy_session = session
