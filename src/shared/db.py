"""Schema management for the SQL-backed providers of a domain."""

from protean.domain import Domain
from sqlalchemy import create_engine


def _sql_providers(domain: Domain):
    """Yield ``(provider, engine)`` for every PostgreSQL provider of ``domain``."""
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] == "postgresql":
            yield provider, create_engine(provider.conn_info["database_uri"])


def _register_tables(domain: Domain, provider) -> None:
    """Touch each aggregate and entity DAO so its table lands in the provider metadata."""
    records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
    for record in records:
        if record.cls.meta_.provider == provider.name:
            domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables, with their unique constraints, for SQL-backed providers."""
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            _register_tables(domain, provider)
            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    with domain.domain_context():
        for provider, engine in _sql_providers(domain):
            provider._metadata.drop_all(engine)
