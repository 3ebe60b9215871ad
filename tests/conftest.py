import os
from pathlib import Path

import pytest

SNAPSHOT_DIR = Path(__file__).resolve().parents[1] / "data" / "mock-data"


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the Protean configuration overlay before any domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture()
def snapshot_dir():
    return SNAPSHOT_DIR


@pytest.fixture()
def snapshot(snapshot_dir):
    from catalogue.accessor.snapshot import StaticSnapshotSource

    return StaticSnapshotSource(snapshot_dir)


@pytest.fixture(autouse=True)
def _reset_collaborators():
    """Drop any catalogue source or gateway a test installed."""
    yield

    from catalogue.accessor import reset_catalogue
    from ordering.address import reset_address_lookup
    from ordering.submission import reset_order_gateway

    reset_catalogue()
    reset_address_lookup()
    reset_order_gateway()
