import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key')

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from app import create_app
from app.errors import StorageFailure
from app.storage import BlobStore, LocalBlobStore
from config import TestingConfig
from models import db, User, Member


class RecordingBlobStore(BlobStore):
    """Keeps uploads in memory so tests can count them."""

    def __init__(self):
        self.uploads = []

    def put(self, filename, stream, content_type=None):
        data = stream.read()
        self.uploads.append({'filename': filename, 'size': len(data), 'content_type': content_type})
        return f'https://blob.test/avatars/{len(self.uploads)}-{filename}'


class FailingBlobStore(BlobStore):
    def __init__(self):
        self.attempts = 0

    def put(self, filename, stream, content_type=None):
        self.attempts += 1
        raise StorageFailure('Failed to upload avatar')


@pytest.fixture
def app(tmp_path):
    app = create_app(TestingConfig)
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    app.extensions['blob_store'] = LocalBlobStore(app.config['UPLOAD_FOLDER'])
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def blob_store(app):
    store = RecordingBlobStore()
    app.extensions['blob_store'] = store
    return store


@pytest.fixture
def failing_blob_store(app):
    store = FailingBlobStore()
    app.extensions['blob_store'] = store
    return store


def ensure_user(username, role='editor', password='pass'):
    if not User.query.filter_by(username=username).first():
        u = User(username=username, role=role)
        u.set_password(password)
        db.session.add(u)
        db.session.commit()
    return User.query.filter_by(username=username).first()


def login(client, username, role='editor', password='pass'):
    ensure_user(username, role=role, password=password)
    return client.post('/login', data={'username': username, 'password': password}, follow_redirects=True)


def member_data(**overrides):
    data = {
        'first_name': 'Ann',
        'last_name': 'Sato',
        'furigana': 'さとう あん',
        'nickname': 'Annie',
        'role': 'Designer',
        'part_time_job': '',
        'description': 'Sketches everything first.',
        'age': '21',
        'join_reason': 'Friends are here.',
        'goal': 'Ship a design system.',
        'message': 'Hello!',
    }
    data.update(overrides)
    return data


def make_member(**overrides):
    values = member_data(**overrides)
    values['age'] = int(values['age'])
    m = Member(**values)
    db.session.add(m)
    db.session.commit()
    return m


def make_members(count, **overrides):
    return [make_member(first_name=f'Member{i:02d}', nickname=f'nick{i:02d}', **overrides)
            for i in range(1, count + 1)]


def fresh(model, ident):
    """Reload from the database, bypassing the test session's identity map."""
    db.session.expire_all()
    return db.session.get(model, ident)


@pytest.fixture
def failing_audit(app):
    """Every INSERT into audit_logs fails; member writes still go through."""
    def refuse(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith('INSERT INTO AUDIT_LOGS'):
            raise OperationalError(statement, parameters, Exception('audit table is locked'))

    event.listen(db.engine, 'before_cursor_execute', refuse)
    yield
    event.remove(db.engine, 'before_cursor_execute', refuse)
