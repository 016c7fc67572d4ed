from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenancy.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenancy.depends import get_unit_of_work, get_unit_of_work_factory
from tenancy.domain.entities import AdminUser, Lead, LeadStatus, User, UserRole, UserTenant


def generate_jwt(user_id, expires_delta: timedelta = timedelta(minutes=15)) -> str:
    """HS256 access token as issued by the identity service"""
    now = datetime.now(UTC)
    payload = {"user_id": str(user_id), "exp": now + expires_delta, "iat": now}
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session, session_factory):
    from config import ApplicationConfig
    from tenancy.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    def override_get_unit_of_work_factory():
        return lambda: SqlAlchemyUnitOfWork(session_factory(), owns_session=True)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_unit_of_work_factory] = override_get_unit_of_work_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {generate_jwt(user.id)}"}

    return _headers


@pytest.fixture
def create_user(db_session):
    async def _create(email: str, admin_role: UserRole = None, **fields) -> User:
        user = User(email=email, password_hash="x" * 60, **fields)
        db_session.add(user)
        await db_session.commit()
        if admin_role is not None:
            db_session.add(AdminUser(user_id=user.id, role=admin_role, is_active=True))
            await db_session.commit()
        # Requests roll back the shared session, which expires attached objects
        db_session.expunge(user)
        return user

    return _create


@pytest_asyncio.fixture
async def super_admin(create_user):
    return await create_user("root@platform.io", admin_role=UserRole.super_admin)


@pytest.fixture
def add_member(db_session):
    async def _add(user: User, tenant_id, role: UserRole = UserRole.tenant_admin, is_active=True):
        db_session.add(
            UserTenant(user_id=user.id, tenant_id=tenant_id, role=role, is_active=is_active)
        )
        await db_session.commit()

    return _add


@pytest.fixture
def create_lead(db_session):
    async def _create(status: LeadStatus = LeadStatus.qualified, **fields) -> Lead:
        values = dict(
            organization_name="Green Farms Cooperative",
            contact_name="Asha Rao",
            email="asha@greenfarms.in",
            status=status,
        )
        values.update(fields)
        lead = Lead(**values)
        db_session.add(lead)
        await db_session.commit()
        db_session.expunge(lead)
        return lead

    return _create


@pytest.fixture
def create_tenant(client, super_admin, auth_headers):
    """Create a tenant through the API as the super admin"""

    async def _create(slug: str = "green-farms", **fields) -> dict:
        payload = {
            "name": "Green Farms",
            "slug": slug,
            "owner_name": "Asha Rao",
            "owner_email": "owner@greenfarms.in",
        }
        payload.update(fields)
        response = await client.post("/tenants", json=payload, headers=auth_headers(super_admin))
        assert response.status_code == 201, response.text
        return response.json()

    return _create
