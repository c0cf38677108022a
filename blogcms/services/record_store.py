"""Thin record store over the SQLAlchemy session.

The translation pipeline only needs four operations: find the first
record matching a filter, list records, fetch by id and save. Keeping
them here lets tests swap in a store whose ``save`` fails.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from blogcms import db
from blogcms.services.errors import PersistenceError

logger = logging.getLogger(__name__)


class RecordStore:
    """Record access backed by ``db.session``."""
    
    def __init__(self, session=None):
        self._session = session
    
    @property
    def session(self):
        return self._session if self._session is not None else db.session
    
    def find_first(self, model, **filters):
        """Return the first ``model`` row matching ``filters`` or None."""
        return self.session.query(model).filter_by(**filters).order_by(model.id).first()
    
    def find_all(self, model, order_by=None, limit=None, offset=None, **filters):
        query = self.session.query(model).filter_by(**filters)
        if order_by is not None:
            query = query.order_by(order_by)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return query.all()
    
    def get(self, model, record_id):
        return self.session.get(model, record_id)
    
    def save(self, record):
        """Insert or update ``record`` and commit.
        
        Raises:
            PersistenceError: the commit failed; the session is rolled back.
        """
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Saving {record!r} failed: {e}")
            raise PersistenceError(str(e)) from e
        return record
