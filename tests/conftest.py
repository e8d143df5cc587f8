import asyncio
import os
import tempfile

# The app engine is built at import time; point it somewhere harmless.
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(), "shop.db"),
)

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from shop.database import create_tables, get_session
from shop.main import app
from shop.models import Product, User
from testdata import ALICE, BOB


@pytest.fixture
def session_maker(tmp_path):
    # NullPool: TestClient runs every request on its own event loop
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    asyncio.run(create_tables(engine))
    yield sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    asyncio.run(engine.dispose())


@pytest.fixture
def run_db(session_maker):
    """Run `fn(session)` in a fresh session and return its result."""
    def _run(fn):
        async def _inner():
            async with session_maker() as session:
                result = await fn(session)
                await session.commit()
                return result
        return asyncio.run(_inner())
    return _run


@pytest.fixture
def seeded(run_db):
    async def _seed(session):
        session.add_all([
            User(email=ALICE, full_name="Alice", password_hash="x"),
            User(email=BOB, full_name="Bob", password_hash="x"),
            Product(id=5, name="Cotton T-shirt", price=Decimal("12.50"), stock=10),
            Product(id=6, name="Wool scarf", price=Decimal("24.00"), stock=1),
        ])
    run_db(_seed)


@pytest.fixture
def client(session_maker):
    async def _get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    # no context manager: startup (create_all on the app engine) is skipped
    yield TestClient(app)
    app.dependency_overrides.clear()
