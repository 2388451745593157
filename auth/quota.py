"""Daily generation quota.

The counter lives on the user's ``Profile`` row. It is valid only for
``last_generation_date``; on any later UTC day it reads as 0. Nothing is
written on a new day until a generation actually commits (lazy reset, no
background job).

``commit`` is a single conditional UPDATE so two concurrent requests from
the same user cannot both take the last slot.
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Union

from flask import current_app
from sqlalchemy import and_, case, or_, update
from sqlalchemy.exc import IntegrityError

from core.errors import QuotaExceededError, ValidationError
from domain.models import Profile, db, utcnow
from domain.policies import DAILY_LIMIT, TIER_FREE, TIERS, UNLIMITED, is_unlimited
from utils.time_utils import utc_today

Remaining = Union[int, str]


@dataclass(frozen=True)
class QuotaCheck:
    allowed: bool
    remaining: Remaining
    used: int


@dataclass(frozen=True)
class QuotaState:
    user_id: str
    tier: str
    generations_today: int
    last_generation_date: Optional[date]


class QuotaLedger:
    def __init__(self, daily_limit: int = DAILY_LIMIT, today: Callable[[], date] = utc_today):
        self.daily_limit = daily_limit
        self.today = today

    # -------------------- reads --------------------
    def load(self, user_id: str) -> QuotaState:
        """Snapshot of the user's profile, creating a free one on first use."""
        row = Profile.query.filter_by(user_id=user_id).first()
        if row is None:
            try:
                row = Profile(user_id=user_id, tier=TIER_FREE, generations_today=0)
                db.session.add(row)
                db.session.commit()
                current_app.logger.info("[QUOTA] profile created user=%s", user_id)
            except IntegrityError:
                # lost the insert race; the other request's row is there now
                db.session.rollback()
                row = Profile.query.filter_by(user_id=user_id).one()

        return QuotaState(
            user_id=row.user_id,
            tier=row.tier or TIER_FREE,
            generations_today=int(row.generations_today or 0),
            last_generation_date=row.last_generation_date,
        )

    def effective_count(self, state: QuotaState) -> int:
        if state.last_generation_date != self.today():
            return 0
        return state.generations_today

    def check_and_reserve(self, user_id: str, tier_is_unlimited: bool, state: QuotaState = None) -> QuotaCheck:
        if state is None:
            state = self.load(user_id)
        used = self.effective_count(state)
        if tier_is_unlimited:
            return QuotaCheck(allowed=True, remaining=UNLIMITED, used=used)
        return QuotaCheck(
            allowed=used < self.daily_limit,
            remaining=max(0, self.daily_limit - used),
            used=used,
        )

    def status(self, user_id: str) -> dict:
        state = self.load(user_id)
        unlimited = is_unlimited(state.tier)
        check = self.check_and_reserve(user_id, unlimited, state=state)
        return {
            "tier": state.tier,
            "used": check.used,
            "limit": None if unlimited else self.daily_limit,
            "generationsRemaining": check.remaining,
        }

    # -------------------- writes --------------------
    def commit(self, user_id: str, tier_is_unlimited: bool) -> int:
        """
        Count one generation for today and return the new count.

        Same day  -> generations_today + 1
        New day   -> 1
        Free tier -> only while the effective count is under the limit;
                     otherwise QuotaExceededError.
        Does not commit the session; the caller owns the transaction.
        """
        today = self.today()
        same_day = Profile.last_generation_date == today

        stmt = (
            update(Profile)
            .where(Profile.user_id == user_id)
            .values(
                generations_today=case((same_day, Profile.generations_today + 1), else_=1),
                last_generation_date=today,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        if not tier_is_unlimited:
            stmt = stmt.where(
                or_(
                    Profile.last_generation_date.is_(None),
                    Profile.last_generation_date != today,
                    and_(same_day, Profile.generations_today < self.daily_limit),
                )
            )

        result = db.session.execute(stmt)
        if result.rowcount == 0:
            current_app.logger.warning("[QUOTA] commit rejected user=%s (limit reached concurrently)", user_id)
            raise QuotaExceededError()

        new_count = db.session.execute(
            db.select(Profile.generations_today).where(Profile.user_id == user_id)
        ).scalar_one()
        current_app.logger.info("[QUOTA] committed user=%s count=%s date=%s", user_id, new_count, today)
        return int(new_count)

    def remaining_after(self, new_count: int, tier_is_unlimited: bool) -> Remaining:
        if tier_is_unlimited:
            return UNLIMITED
        return max(0, self.daily_limit - new_count)

    def set_tier(self, user_id: str, tier: str) -> QuotaState:
        if tier not in TIERS:
            raise ValidationError(f"Unknown tier '{tier}'")
        self.load(user_id)
        row = Profile.query.filter_by(user_id=user_id).one()
        row.tier = tier
        db.session.commit()
        current_app.logger.info("[QUOTA] tier changed user=%s tier=%s", user_id, tier)
        return self.load(user_id)


def get_quota_ledger() -> QuotaLedger:
    return current_app.extensions["quota_ledger"]
