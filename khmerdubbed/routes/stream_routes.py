"""
Episode stream routes
"""
from flask import Blueprint, current_app, jsonify

stream_routes_bp = Blueprint('stream_routes', __name__)


@stream_routes_bp.route('/stream/<content_type>/<stream_id>.json', methods=['GET'])
async def stream(content_type, stream_id):
    """Resolved streams for one episode"""
    result = await current_app.addon.stream(content_type, stream_id)
    return jsonify(result.payload)
