# CORS configuration
from flask_cors import CORS

from cscserver.config import GatewayConfig


def configure_cors(app, config: GatewayConfig):
    # ALLOWED_ORIGINS unset means any origin may call the API
    CORS(app, resources={
        r"/*": {
            "origins": config.cors_origins,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization", "X-API-Key"],
        }
    }, supports_credentials=True)
    return app
