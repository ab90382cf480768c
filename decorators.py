"""
Custom decorators for role-based access control
"""
from functools import wraps
from flask import redirect, url_for, flash, request, jsonify
from flask_login import current_user


def _wants_json():
    return request.blueprint == 'api' or request.path.startswith('/api/')


def role_required(*roles):
    """
    Decorator to require specific role(s). Admin always has access unless explicitly excluded.

    HTML requests are redirected (to the login page or the dashboard);
    API requests get a JSON 401/403 response instead.

    Args:
        *roles: Variable number of role strings (e.g., 'editor', 'admin')

    Returns:
        Decorated function that checks user role before executing

    Example:
        @role_required('admin', 'editor')
        def admin_function():
            pass
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                if _wants_json():
                    return jsonify({'success': False, 'error': 'Authentication required'}), 401
                return redirect(url_for('auth.login', next=request.path))
            user_role = getattr(current_user, 'role', None)
            # admin has all rights (unless roles explicitly exclude it)
            allowed_roles = list(roles)
            if 'admin' not in allowed_roles and user_role == 'admin':
                allowed_roles.append('admin')
            if user_role not in allowed_roles:
                if _wants_json():
                    return jsonify({'success': False, 'error': 'Access denied'}), 403
                flash('Access denied', 'danger')
                return redirect(url_for('admin.dashboard'))
            return f(*args, **kwargs)
        return decorated_function
    return decorator
