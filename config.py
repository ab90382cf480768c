import os

basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise RuntimeError(
            "SECRET_KEY environment variable is required. "
            "Set it via: export SECRET_KEY='your-secure-random-key'"
        )

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', f"sqlite:///{os.path.join(basedir, 'data', 'app.db')}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Avatar storage (local blob store)
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(basedir, 'data', 'uploads'))
    BLOB_BASE_URL = os.environ.get('BLOB_BASE_URL', '/uploads')
    MAX_AVATAR_BYTES = 4 * 1024 * 1024
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    CACHE_TYPE = 'SimpleCache'
    CACHE_DEFAULT_TIMEOUT = 900  # 15 minutes

    # Session cookie security
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = os.environ.get('FLASK_ENV') == 'production'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    CACHE_TYPE = 'NullCache'
    SESSION_COOKIE_SECURE = False
