"""Bearer token -> user id.

Two verifiers share one interface, ``verify(token) -> user_id``:

* ``SignedTokenVerifier`` checks tokens signed by this app with
  ``itsdangerous`` (``flask issue-token`` mints them).
* ``RemoteIdentityVerifier`` asks an external identity service
  (Supabase style ``GET /auth/v1/user``) who the token belongs to.

Both raise ``AuthError`` for anything that is not a valid token.
"""
import requests
from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from core.errors import AuthError


def parse_bearer(header_value):
    """'Bearer abc' -> 'abc'. None when the header is missing or empty."""
    value = (header_value or "").strip()
    if not value:
        return None
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


class SignedTokenVerifier:
    def __init__(self, secret_key, *, salt, max_age=None):
        self.serializer = URLSafeTimedSerializer(secret_key, salt=salt)
        self.max_age = max_age

    def issue(self, user_id: str) -> str:
        return self.serializer.dumps({"sub": user_id})

    def verify(self, token: str) -> str:
        if not token:
            raise AuthError("Authorization required")
        try:
            data = self.serializer.loads(token, max_age=self.max_age)
        except SignatureExpired as e:
            raise AuthError("Token expired", cause=e) from e
        except BadSignature as e:
            raise AuthError("Invalid token", cause=e) from e
        uid = data.get("sub") if isinstance(data, dict) else None
        if not uid:
            raise AuthError("Invalid token")
        return str(uid)


class RemoteIdentityVerifier:
    def __init__(self, url, *, api_key="", timeout=5.0, session=None):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def verify(self, token: str) -> str:
        if not token:
            raise AuthError("Authorization required")
        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["apikey"] = self.api_key
        try:
            r = self.session.get(self.url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            current_app.logger.warning("[AUTH] identity service unreachable: %r", e)
            raise AuthError("Invalid token", cause=e) from e

        if r.status_code != 200:
            current_app.logger.info("[AUTH] token rejected status=%s", r.status_code)
            raise AuthError("Invalid token")
        try:
            uid = (r.json() or {}).get("id")
        except ValueError as e:
            raise AuthError("Invalid token", cause=e) from e
        if not uid:
            raise AuthError("Invalid token")
        return str(uid)


def build_identity_verifier(app):
    cfg = app.config
    if cfg.get("AUTH_VERIFY_URL"):
        return RemoteIdentityVerifier(
            cfg["AUTH_VERIFY_URL"],
            api_key=cfg.get("AUTH_API_KEY") or "",
            timeout=cfg.get("AUTH_VERIFY_TIMEOUT", 5.0),
        )
    return SignedTokenVerifier(
        cfg["SECRET_KEY"],
        salt=cfg.get("AUTH_TOKEN_SALT", "bearer-token-v1"),
        max_age=cfg.get("AUTH_TOKEN_TTL"),
    )


def get_identity_verifier():
    return current_app.extensions["identity_verifier"]
