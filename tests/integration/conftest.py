"""Fixtures for database-backed tests.

Each test gets its own in-memory SQLite database shared by every
session through a StaticPool.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shop_payroll.api.app import create_app
from shop_payroll.api.dependencies import get_app_settings, get_db_session
from shop_payroll.config import AppSettings
from shop_payroll.models import Base, Employee, Shop, TimeEntry
from shop_payroll.services.document_store import LocalDocumentStore

ADMIN_EMAIL = "admin@shop.test"
ADMIN_PASSWORD = "letmein"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def documents(tmp_path) -> LocalDocumentStore:
    return LocalDocumentStore(tmp_path / "uploads")


@pytest.fixture
def app_settings(tmp_path) -> AppSettings:
    return AppSettings(
        database_url="sqlite+aiosqlite://",
        host="127.0.0.1",
        port=8000,
        debug=False,
        log_level="INFO",
        jwt_secret="integration-test-secret-0123456789abcdef",
        jwt_expiry_minutes=60,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        upload_dir=str(tmp_path / "uploads"),
        cors_origins=(),
    )


@pytest_asyncio.fixture
async def client(session_factory, app_settings):
    app = create_app()

    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_app_settings] = lambda: app_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def auth_headers(client) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def add_shop(session: AsyncSession, name: str = "Main Street") -> Shop:
    shop = Shop(name=name, address="1 Main Street")
    session.add(shop)
    await session.flush()
    return shop


async def add_employee(
    session: AsyncSession,
    shop: Shop | None = None,
    name: str = "Thandi",
    surname: str = "Nkosi",
    hourly_rate: str = "120",
    **overrides: Any,
) -> Employee:
    employee = Employee(
        name=name,
        surname=surname,
        email=f"{name.lower()}@shop.test",
        cell_number="0821234567",
        id_number="9001015800087",
        hourly_rate=Decimal(hourly_rate),
        shop_id=shop.shop_id if shop else None,
        **overrides,
    )
    session.add(employee)
    await session.flush()
    return employee


async def add_entry(
    session: AsyncSession,
    employee: Employee,
    clock_in: datetime,
    clock_out: datetime | None = None,
) -> TimeEntry:
    entry = TimeEntry(employee_id=employee.employee_id, clock_in=clock_in, clock_out=clock_out)
    session.add(entry)
    await session.flush()
    return entry
