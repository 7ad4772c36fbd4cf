"""Base factory for async SQLAlchemy models."""

from typing import Any, TypeVar, Generic
from uuid import uuid4

import factory
from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")


class AsyncSQLAlchemyModelFactory(factory.Factory, Generic[T]):
    """Base factory for async SQLAlchemy models.

    ``build`` resolves the declared attributes; persistence is left to
    ``create_async`` because factory_boy has no async session support.
    """

    class Meta:
        abstract = True

    @classmethod
    async def create_async(
        cls, session: AsyncSession, commit: bool = False, **kwargs: Any
    ) -> T:
        """Build, add and flush one instance; commit when asked to."""
        instance = cls.build(**kwargs)
        session.add(instance)
        await session.flush()
        if commit:
            await session.commit()
        return instance

    @classmethod
    async def create_batch_async(
        cls, session: AsyncSession, size: int, commit: bool = False, **kwargs: Any
    ) -> list[T]:
        """Build, add and flush ``size`` instances in one round trip."""
        instances = cls.build_batch(size, **kwargs)
        session.add_all(instances)
        await session.flush()
        if commit:
            await session.commit()
        return instances


class UUIDFactory(factory.LazyFunction):
    """Factory for generating UUIDs."""

    def __init__(self) -> None:
        super().__init__(uuid4)
