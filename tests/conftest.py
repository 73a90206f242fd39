import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the storefront domain once for the whole session. Each test then
    pushes its own domain context through ``run_around_tests``.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Push domain context before each test, cleanup after."""
    from storefront.domain import storefront

    ctx = storefront.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def make_product():
    """Persist a product and return it."""
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _make(name="Widget", price=10.0, stock=5):
        product = Product.create(name=name, price=price, stock=stock)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def make_user():
    """Persist a user and return it."""
    from protean import current_domain
    from storefront.identity.user import User

    counter = {"n": 0}

    def _make(name="Ana Ruiz", email=None):
        counter["n"] += 1
        user = User.register(name=name, email=email or f"user{counter['n']}@example.com")
        current_domain.repository_for(User).add(user)
        return user

    return _make
