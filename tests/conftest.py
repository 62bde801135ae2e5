"""
Pytest configuration and fixtures.

This file provides pytest-specific fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest

from tests import make_session_factory, make_test_engine


@pytest.fixture
def engine():
    """Fresh database per test."""
    engine = make_test_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def store(session_factory):
    """A DocumentStore inside one open unit of work, committed at teardown."""
    from database.uow import store_uow

    with store_uow(session_factory) as store:
        yield store
