"""
Data factories for test data generation.

Factories use factory-boy to create realistic test data with sensible defaults.
All factories support async creation via create_async() method.

Usage:
    from tests.factories import UserFactory, ClientFactory, BillFactory

    user = await UserFactory.create_async(db_session, role="ADMIN")
    client = await ClientFactory.create_async(db_session, assigned_to=user.id)
    bill = await BillFactory.create_async(db_session, client_id=client.id)
    await db_session.commit()
"""

from tests.factories.user import UserFactory
from tests.factories.client import ClientFactory
from tests.factories.project import ProjectFactory
from tests.factories.bill import BillFactory
from tests.factories.payment import PaymentFactory

__all__ = [
    "UserFactory",
    "ClientFactory",
    "ProjectFactory",
    "BillFactory",
    "PaymentFactory",
]
