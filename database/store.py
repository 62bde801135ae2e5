"""
Document store adapter over the SQLAlchemy session.

Exposes the application's tables as named collections with
get/query/create/update/delete and an all-or-nothing batch. Everything runs
inside the session's current transaction; callers get atomicity by using
one unit of work (see database.uow.store_uow) per operation.

Usage:
    with store_uow() as store:
        admitted = store.query('applications', [
            ('student_id', '==', student_id),
            ('status', 'in', ['admitted']),
        ], order_by='-created_at')
"""

import logging
import operator
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from database.models import (
    Base, StudentProfile, Institution, Course, Company, Job,
    CourseApplication, JobApplication, Notification, AdmissionLock
)

logger = logging.getLogger(__name__)

COLLECTIONS: Dict[str, Type[Base]] = {
    'students': StudentProfile,
    'institutions': Institution,
    'courses': Course,
    'companies': Company,
    'jobs': Job,
    'applications': CourseApplication,
    'job_applications': JobApplication,
    'notifications': Notification,
    'admission_locks': AdmissionLock,
}

_COMPARISONS = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
}


class DocumentNotFound(LookupError):
    """Raised by update/delete when the target document does not exist."""

    def __init__(self, collection: str, doc_id: Any):
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


@dataclass(frozen=True)
class Filter:
    field: str
    op: str
    value: Any


@dataclass
class BatchOperation:
    """One write inside DocumentStore.run_batch."""
    action: str  # create|update|delete
    collection: str
    doc_id: Optional[Any] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, collection: str, data: Dict[str, Any]) -> 'BatchOperation':
        return cls('create', collection, None, data)

    @classmethod
    def update(cls, collection: str, doc_id: Any, data: Dict[str, Any]) -> 'BatchOperation':
        return cls('update', collection, doc_id, data)

    @classmethod
    def delete(cls, collection: str, doc_id: Any) -> 'BatchOperation':
        return cls('delete', collection, doc_id)


FilterSpec = Union[Filter, Tuple[str, str, Any]]


class DocumentStore:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def model_for(collection: str) -> Type[Base]:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    def get(self, collection: str, doc_id: Any) -> Optional[Base]:
        if doc_id is None:
            return None
        return self.db.get(self.model_for(collection), doc_id)

    def query(
        self,
        collection: str,
        filters: Iterable[FilterSpec] = (),
        order_by: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Base]:
        """
        Query a collection.

        Args:
            collection: Collection name (see COLLECTIONS).
            filters: Filter objects or (field, op, value) tuples, ANDed.
                Supported ops: ==, !=, <, <=, >, >=, in, not in.
            order_by: Field name; prefix with '-' for descending.
            limit: Maximum number of documents.

        Returns:
            Matching documents.
        """
        model = self.model_for(collection)
        stmt = select(model)

        for spec in filters:
            f = spec if isinstance(spec, Filter) else Filter(*spec)
            stmt = stmt.where(self._clause(model, f))

        if order_by:
            descending = order_by.startswith('-')
            column = self._column(model, order_by.lstrip('-'))
            stmt = stmt.order_by(column.desc() if descending else column.asc())

        if limit is not None:
            stmt = stmt.limit(limit)

        return list(self.db.execute(stmt).scalars().all())

    def create(self, collection: str, data: Dict[str, Any]) -> Any:
        model = self.model_for(collection)
        doc = model(**data)
        self.db.add(doc)
        self.db.flush()
        pk = model.__mapper__.primary_key[0].key
        return getattr(doc, pk)

    def update(self, collection: str, doc_id: Any, data: Dict[str, Any]) -> Base:
        doc = self.get(collection, doc_id)
        if doc is None:
            raise DocumentNotFound(collection, doc_id)
        model = type(doc)
        for key, value in data.items():
            self._column(model, key)
            setattr(doc, key, value)
        self.db.flush()
        return doc

    def delete(self, collection: str, doc_id: Any) -> None:
        doc = self.get(collection, doc_id)
        if doc is None:
            raise DocumentNotFound(collection, doc_id)
        self.db.delete(doc)
        self.db.flush()

    def run_batch(self, operations: Sequence[BatchOperation]) -> List[Any]:
        """
        Apply several writes as one unit.

        All operations are staged first and flushed together; if any of them
        fails the exception propagates and the enclosing unit of work rolls
        the whole transaction back, so no reader ever sees part of a batch.

        Returns:
            Per-operation results: the new id for creates, the doc id otherwise.
        """
        results = []
        for op in operations:
            if op.action == 'create':
                model = self.model_for(op.collection)
                doc = model(**op.data)
                self.db.add(doc)
                results.append(doc)
            elif op.action == 'update':
                doc = self.get(op.collection, op.doc_id)
                if doc is None:
                    raise DocumentNotFound(op.collection, op.doc_id)
                for key, value in op.data.items():
                    self._column(type(doc), key)
                    setattr(doc, key, value)
                results.append(op.doc_id)
            elif op.action == 'delete':
                doc = self.get(op.collection, op.doc_id)
                if doc is None:
                    raise DocumentNotFound(op.collection, op.doc_id)
                self.db.delete(doc)
                results.append(op.doc_id)
            else:
                raise ValueError(f"Unknown batch action: {op.action}")

        self.db.flush()
        logger.debug(f"Flushed batch of {len(operations)} operations")

        return [
            getattr(r, type(r).__mapper__.primary_key[0].key) if isinstance(r, Base) else r
            for r in results
        ]

    @staticmethod
    def _column(model: Type[Base], name: str):
        if name not in model.__table__.columns:
            raise ValueError(f"{model.__tablename__} has no field '{name}'")
        return getattr(model, name)

    def _clause(self, model: Type[Base], f: Filter):
        column = self._column(model, f.field)
        if f.op == 'in':
            return column.in_(list(f.value))
        if f.op == 'not in':
            return column.not_in(list(f.value))
        try:
            return _COMPARISONS[f.op](column, f.value)
        except KeyError:
            raise ValueError(f"Unsupported filter operator: {f.op}") from None


def to_document(doc: Optional[Base]) -> Optional[Dict[str, Any]]:
    """Plain-dict snapshot of a row, safe to use after the session closes."""
    if doc is None:
        return None
    return {attr.key: getattr(doc, attr.key) for attr in type(doc).__mapper__.column_attrs}
