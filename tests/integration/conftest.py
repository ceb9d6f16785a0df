import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import tenant_governance.domain.entities  # noqa: F401  registers the tables
from tenant_governance.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenant_governance.api.utils.jwt import generate_jwt
from tenant_governance.app.services.notification_dispatcher import (
    INotifier,
    NotificationDispatcher,
)
from tenant_governance.depends import get_dispatcher, get_unit_of_work


class RecordingNotifier(INotifier):
    def __init__(self):
        self.sent = []

    async def send(self, event):
        self.sent.append(event)


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
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
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
def dispatcher(notifier):
    return NotificationDispatcher(notifier)


@pytest_asyncio.fixture
async def client(session_factory, dispatcher):
    from config import ApplicationConfig
    from tenant_governance.api.app import create_app

    app = create_app(ApplicationConfig)

    # One session per request, like production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await dispatcher.drain()


@pytest_asyncio.fixture
def admin_headers():
    token = generate_jwt(user_id="sa-1", name="Platform Admin", role="superadmin")
    return {"Authorization": f"Bearer {token}"}
