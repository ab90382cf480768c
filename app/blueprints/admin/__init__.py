# app/blueprints/admin/__init__.py
"""
Admin Blueprint

Responsible for:
- Member dashboard (search, pagination)
- Edit/Delete members
- Export to Excel
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/dashboard')

# Import routes after blueprint creation to avoid circular imports
from . import routes
