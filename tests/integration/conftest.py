"""Fixtures for tests that drive the composed application end to end.

Requests go through the real middleware, so each one runs in the domain
context its path maps to. Assertions against repositories push the
context explicitly.
"""

import pytest


@pytest.fixture(scope="session")
def domains():
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    return {"catalogue": catalogue, "ordering": ordering}


@pytest.fixture(autouse=True)
def run_around_tests(domains):
    """Wipe every provider and event store after each test."""
    yield

    for domain in domains.values():
        with domain.domain_context():
            for _, provider in domain.providers.items():
                provider._data_reset()
            domain.event_store.store._data_reset()
