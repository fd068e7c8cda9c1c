"""
Catalog routes
"""
from flask import Blueprint, current_app, jsonify

catalog_routes_bp = Blueprint('catalog_routes', __name__)


@catalog_routes_bp.route('/catalog/<content_type>/<catalog_id>.json', methods=['GET'])
@catalog_routes_bp.route('/catalog/<content_type>/<catalog_id>/<path:extra>.json', methods=['GET'])
async def catalog(content_type, catalog_id, extra=None):
    """Catalog page; `extra` carries search/skip as a query string"""
    result = await current_app.addon.catalog(content_type, catalog_id, extra)
    return jsonify(result.payload)
