"""/api/email routes."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from cscserver.api.auth import require_api_key
from cscserver.notify.email_sender import WelcomeDetails

logger = logging.getLogger(__name__)

email_bp = Blueprint('email', __name__, url_prefix='/api/email')

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

WELCOME_FIELDS = (
    'recipientEmail',
    'recipientName',
    'recipientDateNaissance',
    'recipientFiliere',
    'recipientCodeMassar',
    'recipientUserCode',
)


@email_bp.route('/welcome', methods=['POST'])
@require_api_key
def send_welcome():
    """Send welcome email to a new subscriber"""
    data = request.get_json(silent=True) or request.form.to_dict() or {}
    if not isinstance(data, dict):
        data = {}
    values = {k: str(data.get(k) or '').strip() for k in WELCOME_FIELDS}

    if not all(values.values()):
        return jsonify({
            'success': False,
            'error': f"Missing required fields: {', '.join(WELCOME_FIELDS)}"
        }), 400

    if not EMAIL_RE.match(values['recipientEmail']):
        return jsonify({'success': False, 'error': 'Invalid email format'}), 400

    logger.info(f"Sending welcome email to: {values['recipientEmail']}")
    try:
        result = current_app.extensions['email_sender'].send_welcome_email(
            WelcomeDetails(
                email=values['recipientEmail'],
                name=values['recipientName'],
                date_naissance=values['recipientDateNaissance'],
                filiere=values['recipientFiliere'],
                code_massar=values['recipientCodeMassar'],
                user_code=values['recipientUserCode'],
            )
        )
    except Exception as e:
        logger.error(f"Error in welcome email route: {e}", exc_info=True)
        return jsonify({'success': False, 'error': str(e) or 'Internal server error'}), 500

    if result.success:
        return jsonify({
            'success': True,
            'message': 'Email sent successfully',
            'messageId': result.message_id
        }), 200
    return jsonify({
        'success': False,
        'error': result.error or 'Failed to send email',
        'details': result.details
    }), 500


@email_bp.route('/status', methods=['GET'])
@require_api_key
def email_status():
    """Check email service status"""
    return jsonify({
        'success': True,
        'service': 'email',
        'configured': current_app.config['GATEWAY'].email_configured,
        'timestamp': datetime.now(timezone.utc).isoformat()
    })
