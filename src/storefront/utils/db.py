from protean.domain import Domain
from sqlalchemy import create_engine

RELATIONAL_PROVIDERS = ("sqlite", "postgresql")


def _relational_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in RELATIONAL_PROVIDERS:
            yield provider


def setup_db(domain: Domain):
    """Create tables for the storefront aggregates and entities.

    Providers without a relational schema, like the in-memory one used by
    default and in tests, are skipped.
    """
    with domain.domain_context():
        for provider in _relational_providers(domain):
            engine = create_engine(provider.conn_info["database_uri"])

            # A repository builds its model lazily; touching _dao registers it
            # with the provider's metadata.
            records = list(domain.registry.aggregates.values()) + list(domain.registry.entities.values())
            for record in records:
                if record.cls.meta_.provider == provider.name:
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop every table created by ``setup_db``."""
    with domain.domain_context():
        for provider in _relational_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
