"""Root conftest — shared test configuration."""

import os

import pytest
from fastapi.testclient import TestClient

# Ensure tests never reach a real Supabase project
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-test-key")

from backend.config import Settings  # noqa: E402
from backend.main import create_app  # noqa: E402
from tests.fake_supabase import FakeSupabaseClient  # noqa: E402


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient(
        tables={"tenders": []},
        rpcs={
            "get_tender_stats": lambda _params: [
                {
                    "total_tenders": 120,
                    "open_tenders": 40,
                    "closing_soon": 7,
                    "last_updated": "2030-06-01T08:00:00+00:00",
                }
            ],
        },
    )


@pytest.fixture
def api(fake_client: FakeSupabaseClient) -> TestClient:
    app = create_app(settings=Settings(supabase_url="https://test-project.supabase.co"), client=fake_client)
    return TestClient(app)
