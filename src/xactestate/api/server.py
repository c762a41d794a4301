"""
Flask Application Factory

Creates and configures the Flask application.
"""

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from xactestate.config import get_config
from xactestate.api.routes import register_routes
from xactestate.exceptions import (
    CalculationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ValidationError,
    XactError,
)
from xactestate.logging_config import get_logger, register_request_logging, setup_logging

logger = get_logger(__name__)

# Exception type -> HTTP status, most specific first
ERROR_STATUS = (
    (ValidationError, 400),
    (CalculationError, 400),
    (ForbiddenError, 403),
    (NotFoundError, 404),
    (RateLimitError, 429),
)


def _error_response(message: str, status: int):
    return jsonify({"status": "error", "error": message}), status


def register_error_handlers(app: Flask) -> None:
    """Turn application errors into JSON error responses."""

    @app.errorhandler(XactError)
    def handle_app_error(e: XactError):
        for exc_type, status in ERROR_STATUS:
            if isinstance(e, exc_type):
                body, status = _error_response(e.message, status)
                if isinstance(e, RateLimitError) and e.retry_after:
                    body.headers["Retry-After"] = str(e.retry_after)
                return body, status
        logger.error("Unhandled application error: %s", e, exc_info=True)
        return _error_response("Internal server error", 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return _error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.error("Unexpected error: %s", e, exc_info=True)
        return _error_response("Internal server error", 500)


def create_app(test_config=None) -> Flask:
    """Create and configure the Flask application.

    Args:
        test_config: Optional test configuration dict.

    Returns:
        Configured Flask application.
    """
    config = get_config()

    # Setup logging
    setup_logging()

    app = Flask(__name__)

    # Apply configuration
    app.config["DEBUG"] = config.api.debug
    app.json.sort_keys = False

    if test_config:
        app.config.update(test_config)

    # Enable CORS
    CORS(app, resources={r"/api/*": {"origins": config.api.cors_origins}})

    register_error_handlers(app)
    register_request_logging(app)

    # Register API routes
    register_routes(app)

    logger.info("Flask app created")
    return app


def run_server(host: str = None, port: int = None, debug: bool = None):
    """Run the Flask development server.

    Args:
        host: Host to bind to.
        port: Port to bind to.
        debug: Enable debug mode.
    """
    config = get_config()

    host = host or config.api.host
    port = port or config.api.port
    debug = debug if debug is not None else config.api.debug

    app = create_app()

    logger.info("Starting server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug)
