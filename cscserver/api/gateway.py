"""Flask application for the CSC API gateway."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, abort, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from limits import parse

from cscserver.api.cors import configure_cors
from cscserver.api.email_routes import email_bp
from cscserver.config import GatewayConfig
from cscserver.notify.email_sender import EmailSender

logger = logging.getLogger(__name__)

SERVICE_NAME = 'CSC API Server'
API_PREFIX = '/api/'


def add_security_headers(response):
    """Add security headers"""
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-XSS-Protection'] = '0'
    response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    response.headers['Content-Security-Policy'] = "default-src 'self'"
    response.headers['Referrer-Policy'] = 'no-referrer'
    response.headers['Cross-Origin-Resource-Policy'] = 'same-origin'
    return response


def create_app(config: GatewayConfig, email_sender: Optional[EmailSender] = None) -> Flask:
    app = Flask(__name__)
    app.config['API_KEY'] = config.api_key
    app.config['GATEWAY'] = config
    app.extensions['email_sender'] = email_sender or EmailSender(config)

    configure_cors(app, config)
    app.after_request(add_security_headers)

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[],
        storage_uri="memory://",
    )
    limiter.init_app(app)
    app.extensions['rate_limiter'] = limiter
    api_limit = parse(config.rate_limit)

    @app.before_request
    def limit_api_routes():
        # One shared window per client for everything under /api/, unknown paths included
        if not request.path.startswith(API_PREFIX):
            return None
        if not limiter.limiter.hit(api_limit, API_PREFIX, get_remote_address()):
            abort(429)
        return None

    app.register_blueprint(email_bp)

    @app.route('/health')
    def health_check():
        """API health check endpoint"""
        return jsonify({
            'status': 'ok',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'service': SERVICE_NAME
        })

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Route not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(429)
    def rate_limit_handler(error):
        return jsonify({
            'success': False,
            'error': 'Too many requests from this IP, please try again later.'
        }), 429

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Server error: {error}")
        body = {'error': 'Internal server error'}
        if config.is_development:
            body['details'] = str(getattr(error, 'original_exception', None) or error)
        return jsonify(body), 500

    return app
