# helimarket/extensions.py
"""
Extensions and the application-wide record store

The store is loaded once at startup and saved after every mutation.
"""

from flask import current_app

from models import db, init_db_events
from persistence import StorageAdapter
from store import RecordStore


def init_extensions(app):
    """
    Initialize the database and the record store for the app instance

    Args:
        app: Flask application instance
    """
    db.init_app(app)
    init_db_events(app)

    with app.app_context():
        db.create_all()

    adapter = StorageAdapter(app)
    store = RecordStore(adapter.load(), on_change=adapter.save)
    app.extensions['storage_adapter'] = adapter
    app.extensions['record_store'] = store
    app.logger.info(f'Record store loaded: {store.counts()}')


def get_store():
    """Record store of the current app."""
    return current_app.extensions['record_store']
