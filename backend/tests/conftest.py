"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from rungraph.main import app


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def v2_definition() -> dict:
    """A branching v2 definition: intake fans out to review and extract."""
    return {
        "schema_version": 2,
        "nodes": [
            {"id": "intake", "type": "manual.trigger"},
            {"id": "review", "type": "human.approval", "title": "Manager sign-off"},
            {"id": "extract", "type": "ai.extract", "output": "facts"},
        ],
        "edges": [
            {"from": "intake", "to": "review"},
            {"from": "intake", "to": "extract"},
        ],
    }


@pytest.fixture
def v1_definition() -> list[dict]:
    """A three step legacy definition."""
    return [
        {"id": "read", "type": "dms.read_document"},
        {"id": "prompt", "type": "ai.prompt"},
        {"id": "approve", "type": "human.approval", "assignee": {"type": "role", "value": "legal"}},
    ]
