"""
Addon routes package
Exports all route blueprints and aggregates them into addon_bp
"""
from flask import Blueprint

from .manifest_routes import manifest_routes_bp
from .catalog_routes import catalog_routes_bp
from .meta_routes import meta_routes_bp
from .stream_routes import stream_routes_bp

addon_bp = Blueprint('addon', __name__)

addon_bp.register_blueprint(manifest_routes_bp)
addon_bp.register_blueprint(catalog_routes_bp)
addon_bp.register_blueprint(meta_routes_bp)
addon_bp.register_blueprint(stream_routes_bp)

__all__ = [
    'addon_bp',
    'manifest_routes_bp',
    'catalog_routes_bp',
    'meta_routes_bp',
    'stream_routes_bp',
]
