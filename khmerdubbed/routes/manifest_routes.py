"""
Manifest, landing and health routes
"""
from flask import Blueprint, current_app, jsonify, url_for

manifest_routes_bp = Blueprint('manifest_routes', __name__)


@manifest_routes_bp.route('/manifest.json', methods=['GET'])
def manifest():
    """Static addon descriptor"""
    return jsonify(current_app.addon.manifest())


@manifest_routes_bp.route('/', methods=['GET'])
def landing():
    """Tiny landing page pointing at the manifest"""
    return jsonify({
        'name': current_app.addon.addon_name,
        'manifest': url_for('addon.manifest_routes.manifest', _external=True),
    })


@manifest_routes_bp.route('/health', methods=['GET'])
def health():
    """Liveness plus in-memory cache statistics"""
    return jsonify({'status': 'ok', 'caches': current_app.addon.cache_stats()})


@manifest_routes_bp.route('/favicon.ico', methods=['GET'])
def favicon():
    return '', 204
