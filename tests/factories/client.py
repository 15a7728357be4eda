"""
Client factory for test data generation.
"""

import factory
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client


class ClientFactory(factory.Factory):
    class Meta:
        model = Client

    name = factory.Faker("company")
    phone = factory.Faker("numerify", text="98########")
    address = factory.Faker("address")
    assigned_to = None

    @classmethod
    async def create_async(cls, db_session: AsyncSession, **kwargs) -> Client:
        instance = cls.build(**kwargs)
        db_session.add(instance)
        await db_session.flush()
        return instance
