# services/history.py
from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from core.errors import NotFoundError, PersistenceError
from domain.models import Generation, db


class HistoryStore:
    """Generation records keyed by owner. Records are immutable; owners may delete them."""

    def append(self, record: Generation) -> Generation:
        """Adds the record to the current transaction (flushed, not committed)."""
        try:
            db.session.add(record)
            db.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(cause=e) from e
        current_app.logger.info("[HISTORY] appended id=%s user=%s", record.id, record.user_id)
        return record

    def list(self, owner_id: str, limit: int | None = None):
        """Newest first."""
        q = (
            Generation.query.filter_by(user_id=owner_id)
            .order_by(Generation.created_at.desc(), Generation.id.desc())
        )
        if limit:
            q = q.limit(limit)
        return q.all()

    def delete(self, owner_id: str, record_id: str) -> None:
        """
        Deletes one of the owner's records.
        Someone else's record and a missing id both raise NotFoundError,
        so existence of other users' records is not revealed.
        """
        row = Generation.query.filter_by(id=record_id, user_id=owner_id).first()
        if row is None:
            current_app.logger.info("[HISTORY] delete miss id=%s user=%s", record_id, owner_id)
            raise NotFoundError("Generation not found")
        db.session.delete(row)
        db.session.commit()
        current_app.logger.info("[HISTORY] deleted id=%s user=%s", record_id, owner_id)


def get_history_store() -> HistoryStore:
    return current_app.extensions["history_store"]
