# app/blueprints/api/__init__.py
"""
API Blueprint

JSON endpoints of the member service:
- Register, read, list, update, delete members
- Avatar replacement
- Landing grid layout
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

# Import routes after blueprint creation to avoid circular imports
from . import routes
