import asyncio
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from cadence.core.database import AsyncSessionLocal, close_database, configure_database, init_database
from cadence.models.track import Track
from fastapi.testclient import TestClient
from hypothesis import settings
from tests.helpers.api_client import APIClient
from tests.helpers.catalog import CATALOG_TRACK_IDS, make_track

# Register Hypothesis profiles for property-based testing
settings.register_profile("fast", max_examples=50, deadline=None)
settings.register_profile("thorough", max_examples=1000, deadline=None)
settings.load_profile("fast")  # Default to fast profile


def pytest_collection_modifyitems(items):
    """Automatically order tests: unit tests first, then property tests, then E2E tests.

    Individual tests marked with @pytest.mark.order("last") will run at the very end.
    """
    for item in items:
        # Skip if item already has explicit order marker
        if hasattr(item, 'get_closest_marker') and item.get_closest_marker('order'):
            continue

        # Assign order based on test file name
        test_file = str(item.fspath)
        if 'test_unit_' in test_file:
            item.add_marker(pytest.mark.order(1))
        elif 'test_props_' in test_file:
            item.add_marker(pytest.mark.order(2))
        elif 'test_e2e_' in test_file:
            item.add_marker(pytest.mark.order(3))


async def _seed_catalog(track_ids: list[int]) -> None:
    async with AsyncSessionLocal() as session:
        session.add_all(Track(**make_track(track_id)) for track_id in track_ids)
        await session.commit()


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite database file with the sample catalog loaded."""
    engine = configure_database(f"sqlite+aiosqlite:///{tmp_path / 'cadence_test.db'}")
    asyncio.run(init_database())
    asyncio.run(_seed_catalog(CATALOG_TRACK_IDS))
    yield engine
    asyncio.run(close_database())


@pytest.fixture
def client(database):
    """TestClient bound to the test database (runs the app lifespan)."""
    from cadence.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api_client(client):
    """Queue API client acting as ``user-1``."""
    return APIClient(client, user_id="user-1")


@pytest.fixture
def other_api_client(client):
    """Queue API client acting as a second user."""
    return APIClient(client, user_id="user-2")


@pytest.fixture
def clean_queue(api_client):
    """Ensure user-1 starts (and ends) with an empty queue."""
    api_client.clear()
    yield
    api_client.clear()
