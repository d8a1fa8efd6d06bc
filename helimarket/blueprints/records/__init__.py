# helimarket/blueprints/records/__init__.py
"""
Records Blueprint

Responsible for:
- Dashboard (counts and recent records)
- List/search, add, delete and clear for every collection
- Operator edits and task toggles
"""

from flask import Blueprint

records_bp = Blueprint('records', __name__, url_prefix='/')

# Import routes after blueprint creation to avoid circular imports
from . import routes
