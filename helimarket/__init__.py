# helimarket/__init__.py - Application Factory Pattern
"""
Flask application factory for the HeliMarket record store.
Used to make testing and running several instances easy.
"""

import logging
import os
import sys

from flask import Flask

from models import db


def _configure_logging(app):
    # prefer stdout (good for Docker); enable file logging with LOG_TO_FILE=1
    if os.environ.get('LOG_TO_FILE') == '1':
        from logging.handlers import RotatingFileHandler
        try:
            os.makedirs('logs', exist_ok=True)
            file_handler = RotatingFileHandler('logs/app.log', maxBytes=10240, backupCount=3)
            file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
        except OSError:
            # fallback to stderr if file logging cannot be configured
            app.logger.addHandler(logging.StreamHandler(sys.stderr))
            app.logger.warning('Could not configure file logging; logs will be sent to stderr')
    else:
        app.logger.addHandler(logging.StreamHandler(sys.stdout))
    app.logger.setLevel(logging.INFO)


def _ensure_sqlite_dir(app):
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:///') and ':memory:' not in db_uri:
        db_dir = os.path.dirname(db_uri.replace('sqlite:///', ''))
        if db_dir and not os.path.exists(db_dir):
            try:
                os.makedirs(db_dir, exist_ok=True)
            except OSError:
                app.logger.warning(f'Could not create directory for sqlite DB: {db_dir}')


def create_app(config_class=None):
    """
    Application Factory Pattern

    Args:
        config_class: Configuration class (default: Config from config.py)

    Returns:
        Flask application instance with the record store loaded
    """
    app = Flask(__name__)

    # Load configuration
    if config_class is None:
        from config import Config
        config_class = Config
    app.config.from_object(config_class)
    # keep record field order (id, created, ...) in responses
    app.json.sort_keys = False

    _configure_logging(app)
    app.logger.info('Application startup')
    _ensure_sqlite_dir(app)

    # Initialize extensions and load the store from storage
    from helimarket.extensions import init_extensions
    init_extensions(app)

    # Register blueprints
    from helimarket.blueprints.records import records_bp
    app.register_blueprint(records_bp)

    from helimarket.blueprints.transfer import transfer_bp
    app.register_blueprint(transfer_bp)

    # CLI commands
    from helimarket.commands import register_commands
    register_commands(app)

    return app
