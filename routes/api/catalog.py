from flask import Blueprint, jsonify

from domain.catalog import catalog_dict

api_catalog_bp = Blueprint("api_catalog", __name__)


# target / tone pickers of the client
@api_catalog_bp.route("/api/catalog", methods=["GET"])
def api_catalog():
    return jsonify(catalog_dict()), 200
