"""Shared fixtures: app on in-memory SQLite, fake provider, fixed clock."""

from datetime import date, timedelta

import pytest

from app import create_app
from auth.quota import QuotaLedger
from core.errors import ProviderError
from domain.models import Generation, Profile, db

TODAY = date(2026, 10, 19)
YESTERDAY = TODAY - timedelta(days=1)


class FakeGateway:
    """Stands in for ProviderGateway; records calls, fails on chosen targets."""

    def __init__(self, fail_on=(), on_call=None):
        self.calls = []
        self.fail_on = set(fail_on)
        self.on_call = on_call

    def generate(self, text, target, tone):
        self.calls.append((text, target, tone))
        if self.on_call:
            self.on_call(target)
        if target in self.fail_on:
            raise ProviderError(target=target, detail={"status": 500})
        return f"[{target}|{tone}] {text}"


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "SQLALCHEMY_ENGINE_OPTIONS": {},
        "RATELIMIT_ENABLED": False,
        "AUTH_VERIFY_URL": "",
        "PROVIDER_DEFAULT": "openrouter",
        "OPENROUTER_API_KEY": "test-key",
    })
    app.extensions["quota_ledger"] = QuotaLedger(daily_limit=5, today=lambda: TODAY)
    app.extensions["provider_gateway"] = FakeGateway()

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def gateway(app):
    return app.extensions["provider_gateway"]


@pytest.fixture
def ledger(app):
    return app.extensions["quota_ledger"]


@pytest.fixture
def make_token(app):
    def _make(user_id):
        return app.extensions["identity_verifier"].issue(user_id)
    return _make


@pytest.fixture
def auth_headers(make_token):
    def _headers(user_id):
        return {"Authorization": f"Bearer {make_token(user_id)}"}
    return _headers


@pytest.fixture
def make_profile(app):
    def _make(user_id, *, tier="free", count=0, last_date=None):
        row = Profile(
            user_id=user_id,
            tier=tier,
            generations_today=count,
            last_generation_date=last_date,
        )
        db.session.add(row)
        db.session.commit()
        return row
    return _make


def fetch_profile(user_id):
    db.session.expire_all()
    return Profile.query.filter_by(user_id=user_id).one()


def generation_count(user_id=None):
    db.session.expire_all()
    q = Generation.query
    if user_id:
        q = q.filter_by(user_id=user_id)
    return q.count()
