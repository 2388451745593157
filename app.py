from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

import routes
from auth.identity import build_identity_verifier
from auth.quota import QuotaLedger
from core.commands import register_commands
from core.config import Config
from core.errors import register_error_handlers
from core.extensions import init_extensions
from core.hooks import register_hooks
from security.headers import init_security_headers
from services.ai.gateway import ProviderGateway
from services.ai.router import build_backend
from services.history import HistoryStore


def init_services(app):
    """App-scoped collaborators of the generation pipeline (replaceable in tests)."""
    cfg = app.config
    app.extensions["identity_verifier"] = build_identity_verifier(app)
    app.extensions["quota_ledger"] = QuotaLedger(daily_limit=cfg["FREE_DAILY_LIMIT"])
    app.extensions["provider_gateway"] = ProviderGateway(
        build_backend(cfg),
        max_tokens=cfg["PROVIDER_MAX_TOKENS"],
        temperature=cfg["PROVIDER_TEMPERATURE"],
    )
    app.extensions["history_store"] = HistoryStore()


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # results must keep the order the targets were requested in
    app.json.sort_keys = False

    if app.config.get("ENV") != "development" and app.config.get("SECRET_KEY") == "local-dev-secret":
        app.logger.warning("SECURITY: set SECRET_KEY to a strong value; bearer tokens are signed with it")

    init_extensions(app)
    init_security_headers(app)
    init_services(app)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    routes.register_routes(app)
    register_hooks(app)
    register_error_handlers(app)
    register_commands(app)

    app.logger.info("[BOOT] provider=%s db=%s", app.config.get("PROVIDER_DEFAULT"),
                    app.config.get("SQLALCHEMY_DATABASE_URI", "").split("@")[-1])
    return app
