"""Fixtures for cross-domain tests spanning the Catalogue and Ordering domains."""

import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(scope="session")
def _ordering_domain(request):
    """Initialize the ordering domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(scope="session", autouse=True)
def setup_databases(_catalogue_domain, _ordering_domain):
    """Create database schemas for both domains."""
    from shared.db import drop_db, setup_db

    setup_db(_catalogue_domain)
    setup_db(_ordering_domain)

    yield

    drop_db(_ordering_domain)
    drop_db(_catalogue_domain)


def _reset(domain):
    for _, provider in domain.providers.items():
        provider._data_reset()
    domain.event_store.store._data_reset()


@pytest.fixture(autouse=True)
def clean_domains(_catalogue_domain, _ordering_domain):
    """Wipe both domains' data after each test."""
    yield

    for domain in (_catalogue_domain, _ordering_domain):
        with domain.domain_context():
            _reset(domain)
