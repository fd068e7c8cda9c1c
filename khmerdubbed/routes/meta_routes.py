"""
Show metadata routes
"""
from flask import Blueprint, current_app, jsonify

meta_routes_bp = Blueprint('meta_routes', __name__)


@meta_routes_bp.route('/meta/<content_type>/<meta_id>.json', methods=['GET'])
async def meta(content_type, meta_id):
    """Show details with the episode list"""
    result = await current_app.addon.meta(content_type, meta_id)
    return jsonify(result.payload)
