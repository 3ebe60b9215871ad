"""Schema management for the relational providers of a Protean domain."""

import structlog
from protean.domain import Domain
from sqlalchemy import create_engine

logger = structlog.get_logger(__name__)

RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    return [p for p in domain.providers.values() if p.conn_info["provider"] in RELATIONAL_PROVIDERS]


def _register_tables(domain: Domain, provider) -> None:
    # Building a DAO registers its table on the provider's metadata
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain) -> list[str]:
    """Create the tables of every relational provider. Returns the provider names touched."""
    touched = []
    with domain.domain_context():
        for provider in _relational_providers(domain):
            _register_tables(domain, provider)
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.create_all(engine)
            logger.info("db.schema_created", domain=domain.name, provider=provider.name)
            touched.append(provider.name)
    return touched


def drop_db(domain: Domain) -> list[str]:
    """Drop the tables of every relational provider. Returns the provider names touched."""
    touched = []
    with domain.domain_context():
        for provider in _relational_providers(domain):
            _register_tables(domain, provider)
            engine = create_engine(provider.conn_info["database_uri"])
            provider._metadata.drop_all(engine)
            logger.info("db.schema_dropped", domain=domain.name, provider=provider.name)
            touched.append(provider.name)
    return touched
