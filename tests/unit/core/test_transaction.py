#!/usr/bin/env python3
"""
Tests for transaction(): store errors become StoreConflict, domain errors pass through.
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm.exc import StaleDataError

from core.exceptions import NotFound, StoreConflict
from core.transaction import transaction
from database.models import Notification
from tests import load


def test_commits_on_success(session_factory):
    with transaction(session_factory) as store:
        doc_id = store.create('notifications', {
            'user_id': 'u1', 'type': 't', 'title': 'Title', 'message': 'Body'
        })

    assert load(session_factory, Notification, doc_id)['title'] == 'Title'


def test_stale_data_becomes_store_conflict(session_factory):
    with pytest.raises(StoreConflict) as exc_info:
        with transaction(session_factory):
            raise StaleDataError("version mismatch")

    assert isinstance(exc_info.value.__cause__, StaleDataError)


def test_other_store_errors_become_store_conflict(session_factory):
    with pytest.raises(StoreConflict):
        with transaction(session_factory):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_domain_errors_pass_through_and_roll_back(session_factory):
    with pytest.raises(NotFound):
        with transaction(session_factory) as store:
            doc_id = store.create('notifications', {
                'user_id': 'u1', 'type': 't', 'title': 'Title', 'message': 'Body'
            })
            raise NotFound("nope")

    assert load(session_factory, Notification, doc_id) is None


def test_concurrent_version_bump_conflicts(session_factory):
    from database.repositories import AdmissionLockRepository
    from database.models import AdmissionLock

    with transaction(session_factory) as store:
        AdmissionLockRepository(store).bump('student-1')

    # A writer that read version 1 commits after another writer moved it to 2
    stale = session_factory()
    lock = stale.get(AdmissionLock, 'student-1')
    assert lock.version_id == 1

    with transaction(session_factory) as store:
        AdmissionLockRepository(store).bump('student-1')

    with pytest.raises(StoreConflict):
        with transaction(lambda: stale) as store:
            AdmissionLockRepository(store).bump('student-1')
