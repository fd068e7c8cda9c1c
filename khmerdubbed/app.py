# khmerdubbed/app.py
import logging

from flask import Flask, jsonify, request

from khmerdubbed.core.config import Config
from khmerdubbed.providers import AddonService

from khmerdubbed.routes import addon_bp


def create_app(overrides=None):
    """Application factory pattern."""
    app = Flask(__name__, instance_relative_config=False)

    # Load configuration
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Set up logging (use config value if available)
    log_level_name = app.config.get("LOG_LEVEL") or "INFO"
    log_level = getattr(logging, str(log_level_name).upper(), logging.INFO)
    logging.basicConfig(level=log_level)

    # Initialize the addon service (owns the process-wide caches)
    app.addon = AddonService(_ConfigView(app.config))

    # Initialize extensions
    from khmerdubbed.core.extensions import cors, limiter
    cors.init_app(app)
    limiter.init_app(app)

    # Register blueprints
    app.register_blueprint(addon_bp)

    # Error handlers
    @app.errorhandler(404)
    def page_not_found(e):
        """Handle 404 errors."""
        app.logger.debug(f"404 error: {request.url}")
        return "Not found", 404, {"Content-Type": "text/plain; charset=utf-8"}

    @app.errorhandler(500)
    def internal_server_error(e):
        """Handle 500 errors."""
        app.logger.error(f"500 error: {str(e)}")
        return jsonify(error="Internal server error"), 500

    @app.errorhandler(429)
    def ratelimit_handler(e):
        """Handle 429 errors (Rate Limit Exceeded)."""
        app.logger.warning(f"Rate limit exceeded: {request.url} - {request.remote_addr}")
        return jsonify(error="Too many requests. Please try again later."), 429

    return app


class _ConfigView:
    """Attribute access over a Flask config mapping"""

    def __init__(self, mapping):
        self._mapping = mapping

    def __getattr__(self, name):
        try:
            return self._mapping[name]
        except KeyError:
            raise AttributeError(name)


# WSGI entry point
app = create_app()

if __name__ == '__main__':
    # Use the created app for local dev
    app.run(debug=True)
