"""Pytest fixtures for async SQLite test database."""
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from market_api.app import create_app
from market_api.database.database import Database
from market_api.services.material_service import create_material
from market_api.services.user_service import create_user


@pytest_asyncio.fixture
async def database(tmp_path):
    """File-backed SQLite store so concurrent sessions see each other's writes."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'market.db'}")
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    """HTTP client bound to an app that uses the test store."""
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def vendor(db_session):
    return await create_user(db_session, {"username": "acme-metals"})


@pytest_asyncio.fixture
async def customer(db_session):
    return await create_user(db_session, {"username": "northwind"})


@pytest_asyncio.fixture
async def material(db_session):
    return await create_material(db_session, {"material_name": "Steel"})


@pytest_asyncio.fixture
async def transaction_payload(vendor, customer, material):
    """Valid create payload referencing existing users and material."""
    return {
        "vendorId": str(vendor.id),
        "customerId": str(customer.id),
        "materialId": str(material.id),
    }
