from flask import Blueprint, jsonify

from auth.entitlements import get_current_user_id, require_user
from domain.schema import history_query_schema
from security.security import safe_args
from services.history import get_history_store

api_history_bp = Blueprint("api_history", __name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 100


@api_history_bp.route("/api/history", methods=["GET"])
@require_user
def api_history():
    args = safe_args(history_query_schema)
    limit = max(1, min(int(args.get("limit", DEFAULT_LIMIT)), MAX_LIMIT))
    rows = get_history_store().list(get_current_user_id(), limit=limit)
    return jsonify({"items": [r.to_dict() for r in rows]}), 200


@api_history_bp.route("/api/history/<record_id>", methods=["DELETE"])
@require_user
def api_history_delete(record_id):
    get_history_store().delete(get_current_user_id(), record_id)
    return jsonify({"ok": True}), 200
