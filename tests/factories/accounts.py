"""Factory for Account models."""

from src.database.models import Account
from .base import AsyncSQLAlchemyModelFactory, UUIDFactory


class AccountFactory(AsyncSQLAlchemyModelFactory[Account]):
    class Meta:
        model = Account

    id = UUIDFactory()
    topup_credits = 0
