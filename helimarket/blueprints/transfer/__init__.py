# helimarket/blueprints/transfer/__init__.py
"""
Transfer Blueprint

Responsible for:
- Export of the whole store as JSON
- JSON import (replaces the collections present in the file)
- CSV import of helipads
"""

from flask import Blueprint

transfer_bp = Blueprint('transfer', __name__, url_prefix='/transfer')

# Import routes after blueprint creation to avoid circular imports
from . import routes
