from flask import Blueprint, jsonify

from auth.entitlements import get_current_user_id, require_user
from auth.quota import get_quota_ledger

api_usage_bp = Blueprint("api_usage", __name__)


@api_usage_bp.route("/api/usage", methods=["GET"])
@require_user
def api_usage_status():
    """
    Today's usage for the caller (lazy reset applied, nothing written back).
    {tier, used, limit, generationsRemaining}
    """
    return jsonify(get_quota_ledger().status(get_current_user_id())), 200
