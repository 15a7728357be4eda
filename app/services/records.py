"""
Client, project and bill records.

Plain create/read operations: required-field validation happens in the
pydantic schemas, this module derives computed fields, assigns ownership,
enforces the bill number uniqueness and loads every read together with
its related records.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import BillStatus
from app.core.errors import Conflict, NotFound, ValidationFailed
from app.core.permissions import UserRole, sees_all_records
from app.logging import get_logger
from app.models.bill import Bill
from app.models.client import Client
from app.models.payment import Payment
from app.models.project import Project
from app.models.user import User
from app.schemas.bill import BillCreate
from app.schemas.client import ClientCreate
from app.schemas.project import ProjectCreate

logger = get_logger(__name__)

CENTS = Decimal("0.01")

# Eager-loading trees, one per read shape in app.schemas.bill.
# Reads use populate_existing: a mapper reached by two paths needs the same loaders on both.
# In CLIENT_TREE, Bill.project comes from the projects already in the identity map.
CLIENT_TREE = (
    selectinload(Client.projects).selectinload(Project.bills).selectinload(Bill.payments),
    selectinload(Client.bills).selectinload(Bill.payments),
)
PROJECT_TREE = (
    selectinload(Project.client),
    selectinload(Project.bills).selectinload(Bill.payments),
)
BILL_TREE = (
    selectinload(Bill.client),
    selectinload(Bill.project),
    selectinload(Bill.payments),
)
PAYMENT_TREE = (
    selectinload(Payment.bill).selectinload(Bill.client),
    selectinload(Payment.bill).selectinload(Bill.project),
)


def to_cents(value) -> Decimal:
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def owned_by(query, model, user: User):
    """Restrict a query to the caller's assignments unless they are an admin."""
    if sees_all_records(UserRole(user.role)):
        return query
    return query.filter(model.assigned_to == user.id)


async def resolve_assignee(db: AsyncSession, user: User, requested: Optional[int]) -> int:
    """
    Admins may assign a record to another user; everyone else owns what they create.

    Raises:
        NotFound: an admin named a user that does not exist
    """
    if not sees_all_records(UserRole(user.role)) or not requested:
        return user.id
    if not await db.get(User, requested):
        raise NotFound("Assigned user not found")
    return requested


async def _first(db: AsyncSession, query):
    result = await db.execute(query.execution_options(populate_existing=True))
    return result.scalar_one_or_none()


# ==================== Clients ====================

async def list_clients(db: AsyncSession, user: User) -> List[Client]:
    query = owned_by(select(Client), Client, user).options(*CLIENT_TREE).order_by(Client.name.asc())
    result = await db.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())


async def get_client(db: AsyncSession, user: User, client_id: int) -> Client:
    query = owned_by(select(Client).filter(Client.id == client_id), Client, user).options(*CLIENT_TREE)
    client = await _first(db, query)
    if not client:
        raise NotFound("Client not found")
    return client


async def create_client(db: AsyncSession, user: User, data: ClientCreate) -> Client:
    assignee = await resolve_assignee(db, user, data.assigned_to)
    client = Client(
        name=data.name,
        phone=data.phone or None,
        address=data.address or None,
        assigned_to=assignee,
    )
    db.add(client)
    await db.commit()
    logger.info("Client created", client_id=client.id, user_id=user.id)
    return await get_client(db, user, client.id)


# ==================== Projects ====================

async def list_projects(db: AsyncSession, user: User) -> List[Project]:
    query = owned_by(select(Project), Project, user).options(*PROJECT_TREE).order_by(Project.created_at.desc())
    result = await db.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())


async def get_project(db: AsyncSession, user: User, project_id: int) -> Project:
    query = owned_by(select(Project).filter(Project.id == project_id), Project, user).options(*PROJECT_TREE)
    project = await _first(db, query)
    if not project:
        raise NotFound("Project not found")
    return project


async def create_project(db: AsyncSession, user: User, data: ProjectCreate) -> Project:
    """
    Create a project for a client visible to the caller.

    area = length x width and total_amount = area x rate are computed here,
    once; later rate changes never touch existing projects.
    """
    await get_client(db, user, data.client_id)
    assignee = await resolve_assignee(db, user, data.assigned_to)

    area = to_cents(data.length * data.width)
    project = Project(
        name=data.name,
        description=data.description or None,
        length=to_cents(data.length),
        width=to_cents(data.width),
        area=area,
        rate_per_sq_ft=to_cents(data.rate_per_sq_ft),
        total_amount=to_cents(area * data.rate_per_sq_ft),
        client_id=data.client_id,
        assigned_to=assignee,
    )
    db.add(project)
    await db.commit()
    logger.info("Project created", project_id=project.id, area=project.area, total=project.total_amount)
    return await get_project(db, user, project.id)


# ==================== Bills ====================

async def list_bills(db: AsyncSession, user: User) -> List[Bill]:
    query = owned_by(select(Bill), Bill, user).options(*BILL_TREE).order_by(Bill.created_at.desc())
    result = await db.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())


async def get_bill(db: AsyncSession, user: Optional[User], bill_id: int) -> Bill:
    """Load a bill with client, project and payments. user=None skips ownership filtering."""
    query = select(Bill).filter(Bill.id == bill_id)
    if user is not None:
        query = owned_by(query, Bill, user)
    bill = await _first(db, query.options(*BILL_TREE))
    if not bill:
        raise NotFound("Bill not found")
    return bill


async def create_bill(db: AsyncSession, user: User, data: BillCreate) -> Bill:
    await get_client(db, user, data.client_id)

    if data.project_id is not None:
        project = await db.get(Project, data.project_id)
        if not project:
            raise NotFound("Project not found")
        if project.client_id != data.client_id:
            raise ValidationFailed("Project does not belong to this client")
    assignee = await resolve_assignee(db, user, data.assigned_to)

    existing = await db.execute(select(Bill.id).filter(Bill.bill_number == data.bill_number))
    if existing.scalar_one_or_none() is not None:
        raise Conflict(f"Bill number {data.bill_number} already exists")

    total = to_cents(data.total_amount)
    bill = Bill(
        bill_number=data.bill_number,
        total_amount=total,
        paid_amount=Decimal("0"),
        outstanding_amount=to_cents(data.outstanding_amount) if data.outstanding_amount is not None else total,
        status=BillStatus.PENDING.value,
        due_date=data.due_date,
        notes=data.notes or None,
        client_id=data.client_id,
        project_id=data.project_id,
        assigned_to=assignee,
    )
    db.add(bill)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with another insert of the same number
        await db.rollback()
        raise Conflict(f"Bill number {data.bill_number} already exists")

    logger.info("Bill created", bill_id=bill.id, bill_number=bill.bill_number, total=bill.total_amount)
    return await get_bill(db, user, bill.id)


# ==================== Payments ====================

async def list_payments(db: AsyncSession, user: User) -> List[Payment]:
    query = select(Payment).join(Payment.bill)
    if not sees_all_records(UserRole(user.role)):
        query = query.filter(Bill.assigned_to == user.id)
    query = query.options(*PAYMENT_TREE).order_by(Payment.payment_date.desc())
    result = await db.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())
