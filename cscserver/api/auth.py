"""Shared-secret API key check for gateway routes."""

from __future__ import annotations

import hmac
import logging
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)


def mask_secret(value: str) -> str:
    """Show only the first and last four characters of a secret."""
    if len(value) > 8:
        return f"{value[:4]}...{value[-4:]}"
    return "****"


def extract_api_key(headers) -> Optional[str]:
    """Key from ``X-API-Key`` or ``Authorization: Bearer <key>``, trimmed."""
    raw = headers.get("X-API-Key")
    if not raw:
        auth = headers.get("Authorization") or ""
        raw = auth[len("Bearer "):] if auth.startswith("Bearer ") else auth
    raw = (raw or "").strip()
    return raw or None


def require_api_key(f):
    """Decorator to require a valid API key"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        provided = extract_api_key(request.headers)
        if not provided:
            return jsonify({
                'success': False,
                'error': 'API key is required. Please provide it in the X-API-Key header or Authorization header.'
            }), 401

        expected = (current_app.config.get('API_KEY') or '').strip()
        if not expected:
            logger.error("API_KEY environment variable is not set!")
            return jsonify({'success': False, 'error': 'Server configuration error'}), 500

        if not hmac.compare_digest(provided.encode('utf-8'), expected.encode('utf-8')):
            logger.warning(
                f"API key mismatch! Received: {mask_secret(provided)} (length: {len(provided)}), "
                f"expected: {mask_secret(expected)} (length: {len(expected)})"
            )
            return jsonify({'success': False, 'error': 'Invalid API key'}), 403

        return f(*args, **kwargs)
    return decorated_function
