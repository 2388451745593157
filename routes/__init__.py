# routes/__init__.py
from .api.catalog import api_catalog_bp
from .api.generate import api_generate_bp
from .api.health import api_health_bp
from .api.history import api_history_bp
from .api.usage import api_usage_bp


def register_routes(app):
    app.register_blueprint(api_health_bp)
    app.register_blueprint(api_catalog_bp)
    app.register_blueprint(api_generate_bp)
    app.register_blueprint(api_usage_bp)
    app.register_blueprint(api_history_bp)
