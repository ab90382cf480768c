# app/__init__.py - Application Factory Pattern
"""
Flask application factory for the team directory.
Used for easier testing and configuration per environment.
"""

import logging
import os
import sys

from flask import Flask, jsonify, request

from models import db


def _configure_logging(app):
    # prefer stdout (good for Docker); enable file logging with LOG_TO_FILE=1
    log_to_file = os.environ.get('LOG_TO_FILE') == '1'
    if log_to_file:
        from logging.handlers import RotatingFileHandler
        if not os.path.exists('logs'):
            os.makedirs('logs')
        try:
            file_handler = RotatingFileHandler('logs/app.log', maxBytes=10240, backupCount=3)
            file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
        except OSError:
            # fallback to stderr if file logging cannot be configured
            app.logger.addHandler(logging.StreamHandler(sys.stderr))
            app.logger.warning('Could not configure file logging; logs will be sent to stderr')
    else:
        # In containers, it's best to log to stdout
        app.logger.addHandler(logging.StreamHandler(sys.stdout))
    app.logger.setLevel(logging.INFO)


def create_app(config_class=None):
    """
    Application Factory Pattern

    Args:
        config_class: Configuration class (default: Config from config.py)

    Returns:
        Flask application instance
    """
    app = Flask(__name__,
                template_folder='../templates',
                static_folder='../static')

    # Load configuration
    if config_class is None:
        from config import Config
        config_class = Config
    app.config.from_object(config_class)

    _configure_logging(app)
    app.logger.info('Application startup')

    # Ensure data directory exists when using a local sqlite file
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:///') and db_uri != 'sqlite:///:memory:':
        db_dir = os.path.dirname(db_uri.replace('sqlite:///', ''))
        if db_dir and not os.path.exists(db_dir):
            try:
                os.makedirs(db_dir, exist_ok=True)
            except OSError:
                app.logger.warning(f'Could not create directory for sqlite DB: {db_dir}')

    # Initialize extensions
    from app.extensions import init_extensions, login_manager
    init_extensions(app)

    # User loader callback
    from models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Register blueprints
    from app.blueprints.auth import auth_bp
    app.register_blueprint(auth_bp)

    from app.blueprints.admin import admin_bp
    app.register_blueprint(admin_bp)

    from app.blueprints.api import api_bp
    app.register_blueprint(api_bp)

    # Directory last: it owns the catch-all /<int:member_id> profile route
    from app.blueprints.directory import directory_bp
    app.register_blueprint(directory_bp)

    @app.errorhandler(413)
    def request_too_large(error):
        if request.path.startswith('/api/'):
            return jsonify({'success': False, 'error': 'Request body is too large'}), 413
        return error

    # CLI commands for database management
    import click
    from models import Member, log_action

    @app.cli.command('init-db')
    def init_db():
        """Create database tables."""
        db.create_all()
        click.echo('Initialized the database.')

    @app.cli.command('create-admin')
    @click.argument('username')
    @click.argument('password')
    def create_admin(username, password):
        """Create an admin user: flask create-admin <username> <password>"""
        _create_user(username, password, 'admin')

    @app.cli.command('create-user')
    @click.argument('username')
    @click.argument('password')
    @click.argument('role', type=click.Choice(['admin', 'editor'], case_sensitive=False))
    def create_user(username, password, role):
        """Create a user with specified role: flask create-user <username> <password> <role>"""
        _create_user(username, password, role.lower())

    def _create_user(username, password, role):
        if User.query.filter_by(username=username).first():
            click.echo('User already exists.')
            return
        u = User(username=username, role=role)
        u.set_password(password)
        db.session.add(u)
        db.session.commit()
        # audit (CLI-created)
        try:
            log_action(None, 'user.create', 'user', u.id, f'created by CLI with role={role}')
        except Exception:
            app.logger.exception('Failed to write audit log for user.create')
        app.logger.info(f'User created by CLI: {username} with role {role}')
        click.echo(f'Created {role} user {username}')

    @app.cli.command('seed-members')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def seed_members_command(path):
        """Replace all members with the entries of a JSON seed file."""
        from app.errors import ValidationError
        from app.seed import load_seed_file, seed_members
        from utils import clear_member_cache

        try:
            members = seed_members(load_seed_file(path))
        except ValidationError as e:
            raise click.ClickException(f'Invalid seed entry: {e.message}')
        clear_member_cache()
        for m in members:
            click.echo(f'Created team member: {m.first_name} {m.last_name}')
        app.logger.info(f'Seeded {len(members)} team members from {path}')
        click.echo(f'Seeding finished ({Member.query.count()} members).')

    return app
