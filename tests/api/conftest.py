"""API test fixtures — FastAPI test client over the shared test store.

Invariants:
    - get_store overridden so routes and fixtures (`make`, `geo`) see one store
    - Overrides cleared after each test
"""

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from speki.api.dependencies import get_store
from speki.main import app


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def world(make):
    """Country <- Capital hierarchy with one instance each and one pattern."""
    country = make.klass("Country")
    city = make.klass("City")
    capital = make.klass("Capital", parent=city)
    return SimpleNamespace(
        country=country,
        city=city,
        capital=capital,
        france=make.instance("France", country),
        paris=make.instance("Paris", capital),
        capital_of=make.pattern("capital of {}", country, back_type=city),
    )
