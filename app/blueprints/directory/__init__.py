# app/blueprints/directory/__init__.py
"""
Directory Blueprint

Responsible for:
- Landing page bubble grid
- Public member gallery and profiles
- Registration form
- Serving uploaded avatars
"""

from flask import Blueprint

directory_bp = Blueprint('directory', __name__)

# Import routes after blueprint creation to avoid circular imports
from . import routes
