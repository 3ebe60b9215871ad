import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session", autouse=True)
def catalogue_schema(_catalogue_domain):
    """Create tables when the environment configures a relational provider."""
    from shared.db import drop_db, setup_db

    setup_db(_catalogue_domain)
    yield
    drop_db(_catalogue_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Each test runs inside the catalogue context and starts from empty repositories."""
    with _catalogue_domain.domain_context():
        yield

        from protean import current_domain

        for provider in current_domain.providers.values():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def variations():
    return [
        {"type": "size", "name": "Tamanho", "options": ["P", "M", "G"]},
        {"type": "color", "name": "Cor", "options": ["Preto", "Branco"]},
    ]
