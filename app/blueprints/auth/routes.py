# app/blueprints/auth/routes.py
"""
Authentication routes
"""

from flask import render_template, redirect, url_for, flash, request, current_app
from flask_login import login_user, logout_user, login_required

from models import User
from . import auth_bp


def _safe_next(target):
    # only same-site paths; never "//host" or absolute URLs
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """
    Login page and authentication handler

    GET: Display login form
    POST: Authenticate user and redirect to dashboard
    """
    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')
        user = User.query.filter_by(username=username).first()

        if user and user.check_password(password):
            login_user(user)
            current_app.logger.info(f'User signed in: {user.username}')
            return redirect(_safe_next(request.form.get('next')) or url_for('admin.dashboard'))

        flash('Invalid username or password', 'danger')
        return redirect(url_for('auth.login', next=request.form.get('next') or None))

    return render_template('login.html', next=request.args.get('next', ''))


@auth_bp.route('/logout')
@login_required
def logout():
    """
    Logout current user and redirect to login page
    """
    logout_user()
    return redirect(url_for('auth.login'))
