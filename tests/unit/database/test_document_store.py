#!/usr/bin/env python3
"""
Tests for the document store adapter and the unit of work.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from database.models import Notification
from database.store import BatchOperation, DocumentNotFound, Filter
from database.uow import store_uow
from tests import load, seed_course, seed_institution, seed_student


def _notification(user_id, title, minutes_ago=0, read=False):
    return {
        'user_id': user_id,
        'type': 'application_update',
        'title': title,
        'message': f"{title} message",
        'read': read,
        'created_at': datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
    }


def test_create_get_update_delete(store):
    doc_id = store.create('notifications', _notification('u1', 'First'))

    assert store.get('notifications', doc_id).title == 'First'

    store.update('notifications', doc_id, {'read': True})
    assert store.get('notifications', doc_id).read is True

    store.delete('notifications', doc_id)
    assert store.get('notifications', doc_id) is None


def test_query_filters_order_and_limit(store):
    store.create('notifications', _notification('u1', 'old', minutes_ago=30))
    store.create('notifications', _notification('u1', 'new', minutes_ago=1, read=True))
    store.create('notifications', _notification('u1', 'mid', minutes_ago=10))
    store.create('notifications', _notification('u2', 'other'))

    newest_first = store.query('notifications', [('user_id', '==', 'u1')], order_by='-created_at')
    assert [n.title for n in newest_first] == ['new', 'mid', 'old']

    oldest = store.query('notifications', [Filter('user_id', '==', 'u1')], order_by='created_at', limit=1)
    assert [n.title for n in oldest] == ['old']

    picked = store.query('notifications', [('title', 'in', ['old', 'other'])], order_by='title')
    assert [n.title for n in picked] == ['old', 'other']

    rest = store.query('notifications', [('title', 'not in', ['old', 'other']), ('read', '!=', True)])
    assert [n.title for n in rest] == ['mid']


def test_query_rejects_unknown_fields_and_operators(store):
    with pytest.raises(ValueError):
        store.query('notifications', [('nope', '==', 1)])
    with pytest.raises(ValueError):
        store.query('notifications', [('user_id', 'like', 'u%')])
    with pytest.raises(ValueError):
        store.query('unknown_collection')


def test_update_missing_document(store):
    with pytest.raises(DocumentNotFound):
        store.update('notifications', 'missing', {'read': True})


def test_run_batch_applies_all_operations(session_factory):
    with store_uow(session_factory) as store:
        keep = store.create('notifications', _notification('u1', 'keep'))
        drop = store.create('notifications', _notification('u1', 'drop'))

    with store_uow(session_factory) as store:
        results = store.run_batch([
            BatchOperation.update('notifications', keep, {'read': True}),
            BatchOperation.delete('notifications', drop),
            BatchOperation.create('notifications', _notification('u1', 'added')),
        ])

    assert results[0] == keep
    assert results[1] == drop
    assert load(session_factory, Notification, results[2])['title'] == 'added'
    assert load(session_factory, Notification, keep)['read'] is True
    assert load(session_factory, Notification, drop) is None


def test_run_batch_is_all_or_nothing(session_factory):
    with store_uow(session_factory) as store:
        keep = store.create('notifications', _notification('u1', 'keep'))

    with pytest.raises(DocumentNotFound):
        with store_uow(session_factory) as store:
            store.run_batch([
                BatchOperation.update('notifications', keep, {'read': True}),
                BatchOperation.delete('notifications', 'missing'),
            ])

    assert load(session_factory, Notification, keep)['read'] is False


def test_live_application_unique_index(session_factory):
    student_id = seed_student(session_factory)
    institution_id = seed_institution(session_factory)
    course_id = seed_course(session_factory, institution_id)
    application = {'student_id': student_id, 'course_id': course_id, 'institution_id': institution_id}

    with store_uow(session_factory) as store:
        store.create('applications', {**application, 'status': 'rejected'})
        store.create('applications', {**application, 'status': 'pending'})

    with pytest.raises(IntegrityError):
        with store_uow(session_factory) as store:
            store.create('applications', {**application, 'status': 'admitted'})
