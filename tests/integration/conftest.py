"""Shared fixtures for integration tests."""

import os
import uuid

import pytest

from documentdb import ConnectionInfo

# Skip all integration tests unless RUN_DOCUMENTDB_NETWORK_TESTS=1
RUN_NETWORK_TESTS = os.environ.get("RUN_DOCUMENTDB_NETWORK_TESTS") == "1"


def pytest_collection_modifyitems(config, items):
    if RUN_NETWORK_TESTS:
        return
    skip = pytest.mark.skip(
        reason="Requires network access. Set RUN_DOCUMENTDB_NETWORK_TESTS=1 to run"
    )
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(skip)


@pytest.fixture
def connection() -> ConnectionInfo:
    """Account from DOCUMENTDB_ACCOUNT_URL / DOCUMENTDB_KEY with a throwaway database."""
    url = os.environ.get("DOCUMENTDB_ACCOUNT_URL")
    key = os.environ.get("DOCUMENTDB_KEY")
    if not url or not key:
        pytest.skip("DOCUMENTDB_ACCOUNT_URL and DOCUMENTDB_KEY must be set")
    suffix = uuid.uuid4().hex[:8]
    return ConnectionInfo(
        account_url=url,
        primary_or_secondary_key=key,
        database_id=f"it-db-{suffix}",
        collection_id=f"it-coll-{suffix}",
    )
