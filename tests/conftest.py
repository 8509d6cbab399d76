import pytest
from httpx import ASGITransport, AsyncClient

from folderstore import api
from folderstore.api.dependencies import get_store
from tests.tools import FlakyObjectStore


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(scope="function")
def store():
    return FlakyObjectStore()


@pytest.fixture(scope="function")
async def client(store):
    api.app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(transport=ASGITransport(app=api.app), base_url="http://test", follow_redirects=False) as client:
        yield client
    api.app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def app():
    return api.app
