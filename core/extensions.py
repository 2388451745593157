# extensions.py
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate

from domain.models import db


migrate = Migrate()

# limiter is created bare; storage/default_limits come from app.config
limiter = Limiter(key_func=get_remote_address)

cors = CORS()


def init_extensions(app):
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)

    # CORS: /api/* only. Auth is a bearer header, no cookies
    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": app.config.get("CORS_ORIGINS") or [],
                "methods": ["POST", "GET", "DELETE"],
                "allow_headers": ["Content-Type", "Authorization", "X-Client-Info", "apikey"],
            },
            r"/generate-content": {
                "origins": app.config.get("CORS_ORIGINS") or [],
                "methods": ["POST"],
                "allow_headers": ["Content-Type", "Authorization", "X-Client-Info", "apikey"],
            },
        },
    )
