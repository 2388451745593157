# -------------------- route --------------------
from flask import Blueprint, current_app, jsonify

from auth.entitlements import bearer_token
from core.extensions import limiter
from security.security import json_body
from services.generation import GenerationOrchestrator

api_generate_bp = Blueprint("api_generate", __name__)


def _generate_rate_limit():
    return current_app.config.get("GENERATE_RATE_LIMIT", "60/minute")


# JSON API: bearer auth + per-IP rate limit.
# /generate-content keeps the original client's endpoint name.
@api_generate_bp.route("/api/generate", methods=["POST"])
@api_generate_bp.route("/generate-content", methods=["POST"])
@limiter.limit(_generate_rate_limit)
def api_generate():
    orchestrator = GenerationOrchestrator.from_app()
    outcome = orchestrator.handle(bearer_token(), json_body())
    return jsonify(outcome.to_response()), 200
