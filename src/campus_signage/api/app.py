"""
Main Flask application.
"""
from flask import Flask
from flask_cors import CORS
import logging
from datetime import datetime
from typing import Callable, Optional
from pathlib import Path

from ..clock import fixed_now
from ..config import Config
from ..store import EventStore
from ..weather import CampusWeather
from .routes.events_routes import events_bp
from .routes.admin_routes import admin_api_bp
from .routes.auth_routes import create_auth_blueprint
from .routes.pages_routes import pages_bp

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent.parent


def create_app(config: Optional[Config] = None,
               store: Optional[EventStore] = None,
               weather: Optional[CampusWeather] = None,
               clock: Callable[[], datetime] = fixed_now) -> Flask:
    """
    Creates and configures the Flask application.

    Args:
        config: Application config (loaded from config/config.yaml by default)
        store: Event store; defaults to the Postgres-backed ``EventStore``
        weather: Weather lookup for the display header
        clock: Source of "now" in the fixed timezone

    Returns:
        Configured Flask application
    """
    config = config or Config()

    app = Flask(
        __name__,
        template_folder=str(PACKAGE_DIR / "templates"),
        static_folder=str(PACKAGE_DIR / "static"),
    )

    server_config = config.server_config
    app.config['SERVER_HOST'] = server_config['host']
    app.config['SERVER_PORT'] = server_config['port']
    app.config['DEBUG'] = server_config['debug']

    # Session settings
    session_config = config.session_config
    app.config['SESSION_SECRET'] = session_config['secret']
    app.config['SESSION_EXPIRY_HOURS'] = session_config['expiry_hours']
    app.config['SIGNAGE_COOKIE_NAME'] = session_config['cookie_name']
    app.config['SIGNAGE_COOKIE_SECURE'] = session_config['secure']
    if not session_config['secret']:
        logger.error("SESSION_SECRET is not set: admin sign-in is disabled")

    credentials = config.admin_credentials
    app.config['ADMIN_USER'] = credentials['username']
    app.config['ADMIN_PASS'] = credentials['password']

    signage_config = config.signage_config
    app.config['SIGNAGE'] = signage_config
    app.config['FEED_LIMIT'] = signage_config['feed_limit']

    # CORS
    security_config = config.security_config
    if security_config['enable_cors']:
        CORS(app, resources={r"/api/*": {"origins": security_config['allowed_origins']}},
             send_wildcard=True)

    weather_config = config.weather_config
    app.extensions['event_store'] = store or EventStore(config)
    app.extensions['weather'] = weather or CampusWeather(
        weather_config['api_key'],
        city=weather_config['city'],
        units=weather_config['units'],
        timeout=weather_config['timeout'],
    )
    app.extensions['clock'] = clock

    app.register_blueprint(events_bp)
    app.register_blueprint(admin_api_bp)
    app.register_blueprint(create_auth_blueprint())
    app.register_blueprint(pages_bp)

    @app.route('/api/health', methods=['GET'])
    def health_check():
        return {
            'status': 'ok',
            'timestamp': clock().isoformat()
        }

    return app
