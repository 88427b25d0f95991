import logging

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from schooldesk.db import Backend
from schooldesk.main import create_app

SCHOOL = "school-1"
OTHER_SCHOOL = "school-2"


# async tests run on asyncio only
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def backend():
    """A connected backend over a fresh in-memory database."""
    backend = Backend(db_name="schooldesk_test")
    await backend.connect(client=AsyncMongoMockClient())
    yield backend


@pytest.fixture
def offline_backend():
    """A backend whose connect() was never called."""
    return Backend(db_name="schooldesk_test")


@pytest.fixture
async def client(backend):
    app = create_app(backend)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def offline_client(offline_backend):
    app = create_app(offline_backend)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def warnings_log(caplog):
    caplog.set_level(logging.WARNING, logger="schooldesk")
    return caplog
