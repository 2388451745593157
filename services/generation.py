"""Generation request handler.

One request walks through::

    received -> authenticated -> quota_checked -> generating -> persisted -> responded

and any step can end it instead (``AppError.stage`` records where).

* auth, validation and quota failures never reach the provider and never
  touch the quota counter
* targets are generated one after another in request order; the first
  provider failure aborts the request and earlier outputs are dropped
* a history write failure is logged and the request still succeeds; the
  quota is committed either way
* the history insert and the quota update share a transaction, so losing
  the quota race at commit time also drops the record
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from core.errors import AppError, PersistenceError, QuotaExceededError, ValidationError
from domain.models import Generation, db
from domain.policies import MAX_INPUT_CHARS, MAX_TARGETS, is_unlimited
from domain.schema import api_generate_schema
from security.security import clean_payload


class Stage(str, Enum):
    RECEIVED = "received"
    AUTHENTICATED = "authenticated"
    QUOTA_CHECKED = "quota_checked"
    GENERATING = "generating"
    PERSISTED = "persisted"
    RESPONDED = "responded"


@dataclass(frozen=True)
class GenerationRequest:
    text: str
    targets: Tuple[str, ...]
    tone: str


@dataclass(frozen=True)
class GenerationOutcome:
    results: Dict[str, str]
    generations_remaining: Union[int, str]
    record_id: Optional[str] = None

    def to_response(self) -> dict:
        return {
            "results": dict(self.results),
            "generationsRemaining": self.generations_remaining,
        }


class GenerationOrchestrator:
    def __init__(
            self,
            *,
            identity,
            ledger,
            gateway,
            history,
            max_input_chars=MAX_INPUT_CHARS,
            max_targets=MAX_TARGETS,
    ):
        self.identity = identity
        self.ledger = ledger
        self.gateway = gateway
        self.history = history
        self.max_input_chars = max_input_chars
        self.max_targets = max_targets

    @classmethod
    def from_app(cls, app=None):
        app = app or current_app
        ext = app.extensions
        return cls(
            identity=ext["identity_verifier"],
            ledger=ext["quota_ledger"],
            gateway=ext["provider_gateway"],
            history=ext["history_store"],
            max_input_chars=app.config.get("MAX_INPUT_CHARS", MAX_INPUT_CHARS),
            max_targets=app.config.get("MAX_TARGETS", MAX_TARGETS),
        )

    # -------------------- validation --------------------
    def validate(self, payload) -> GenerationRequest:
        if payload is None:
            raise ValidationError("JSON body required")
        data = clean_payload(payload, api_generate_schema)

        text = data["text"] if "text" in data else data.get("content")
        targets = data["targets"] if "targets" in data else data.get("platforms")
        tone = data.get("tone")

        if not text or not text.strip() or not targets or not tone or not tone.strip():
            raise ValidationError("Missing required fields")
        if len(text) > self.max_input_chars:
            raise ValidationError(f"Content too long (max {self.max_input_chars:,} characters)")

        # ordered set: first occurrence wins
        targets = tuple(dict.fromkeys(t for t in targets if t and t.strip()))
        if not targets:
            raise ValidationError("Missing required fields")
        if len(targets) > self.max_targets:
            raise ValidationError(f"Too many targets (max {self.max_targets})")

        return GenerationRequest(text=text, targets=targets, tone=tone)

    # -------------------- pipeline --------------------
    def handle(self, token, payload) -> GenerationOutcome:
        log = current_app.logger
        stage = Stage.RECEIVED
        owner_id = None
        try:
            owner_id = self.identity.verify(token)
            stage = Stage.AUTHENTICATED

            req = self.validate(payload)
            state = self.ledger.load(owner_id)
            unlimited = is_unlimited(state.tier)
            check = self.ledger.check_and_reserve(owner_id, unlimited, state=state)
            if not check.allowed:
                raise QuotaExceededError()
            # nothing pending; don't hold a transaction open across provider calls
            db.session.rollback()
            stage = Stage.QUOTA_CHECKED

            log.info(
                "[GENERATE] user=%s targets=%s tone=%s chars=%s used=%s",
                owner_id, list(req.targets), req.tone, len(req.text), check.used,
            )
            stage = Stage.GENERATING
            results = self._generate_all(req)

            record_id = self._persist(owner_id, req, results)
            stage = Stage.PERSISTED

            new_count = self.ledger.commit(owner_id, unlimited)
            db.session.commit()
            stage = Stage.RESPONDED
        except AppError as e:
            db.session.rollback()
            if e.stage is None:
                e.stage = stage.value
            log.info(
                "[GENERATE] failed stage=%s user=%s error=%s reason=%s",
                e.stage, owner_id, type(e).__name__, e.message,
            )
            raise
        except SQLAlchemyError as e:
            # the quota commit itself could not be written
            db.session.rollback()
            log.exception("[GENERATE] store failure stage=%s user=%s", stage.value, owner_id)
            raise PersistenceError(stage=stage.value, cause=e) from e

        remaining = self.ledger.remaining_after(new_count, unlimited)
        log.info("[GENERATE] ok user=%s record=%s remaining=%s", owner_id, record_id, remaining)
        return GenerationOutcome(results=results, generations_remaining=remaining, record_id=record_id)

    def _generate_all(self, req: GenerationRequest) -> Dict[str, str]:
        results = {}
        for target in req.targets:
            results[target] = self.gateway.generate(req.text, target, req.tone)
        return results

    def _persist(self, owner_id, req: GenerationRequest, results) -> Optional[str]:
        record = Generation(
            user_id=owner_id,
            original_content=req.text,
            tone=req.tone,
            platforms=list(req.targets),
            results=dict(results),
        )
        try:
            self.history.append(record)
        except PersistenceError as e:
            # the generation is delivered anyway and still counts against the quota
            db.session.rollback()
            current_app.logger.exception(
                "[GENERATE] history append failed user=%s cause=%r", owner_id, e
            )
            return None
        return record.id
