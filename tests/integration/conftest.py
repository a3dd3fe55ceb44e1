import os

import pytest

from helpers import CleanupManager, make_client, sweep_orphans


def pytest_collection_modifyitems(config, items):
    here = os.path.dirname(__file__)
    skip = pytest.mark.skip(reason="SONAR_URL is not set")
    for item in items:
        if not str(item.path).startswith(here):
            continue
        item.add_marker(pytest.mark.integration)
        if not os.environ.get("SONAR_URL"):
            item.add_marker(skip)


@pytest.fixture(scope="session")
def live_client():
    with make_client() as client:
        sweep_orphans(client)
        yield client


@pytest.fixture
def cleanup():
    manager = CleanupManager()
    yield manager
    errors = manager.cleanup()
    assert not errors, "\n".join(errors)
