# models.py
import uuid
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Index
from sqlalchemy.dialects.postgresql import JSONB

db = SQLAlchemy()

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = db.JSON().with_variant(JSONB(), "postgresql")


def utcnow():
    # naive UTC, same convention for every DateTime column
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _new_id():
    return str(uuid.uuid4())


# =========================
#   Core: Profiles (tier + daily quota)
# =========================
class Profile(db.Model):
    """
    One row per identity user.
      - tier: "free" | "unlimited" (changed by an admin only)
      - generations_today is only meaningful while last_generation_date == today (UTC)
    """
    __tablename__ = "profiles"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(255), unique=True, nullable=False, index=True)

    tier = db.Column(db.String(16), nullable=False, default="free", index=True)
    generations_today = db.Column(db.Integer, nullable=False, default=0)
    last_generation_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    generations = db.relationship(
        "Generation",
        primaryjoin="Profile.user_id==foreign(Generation.user_id)",
        lazy=True,
        viewonly=True,
    )


# =========================
#   Product: Generations (history)
# =========================
class Generation(db.Model):
    __tablename__ = "generations"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    user_id = db.Column(db.String(255), nullable=False, index=True)

    original_content = db.Column(db.Text, nullable=False)
    tone = db.Column(db.String(64), nullable=False)
    platforms = db.Column(JSONType, nullable=False, default=list)
    results = db.Column(JSONType, nullable=False, default=dict)

    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    __table_args__ = (
        Index("idx_generations_user_created", "user_id", "created_at"),
    )

    def ordered_results(self):
        # JSONB drops key order; platforms keeps the order the caller asked for
        results = dict(self.results or {})
        ordered = {p: results.pop(p) for p in (self.platforms or []) if p in results}
        ordered.update(results)
        return ordered

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "original_content": self.original_content,
            "tone": self.tone,
            "platforms": list(self.platforms or []),
            "results": self.ordered_results(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
