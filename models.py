from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import UserMixin
from sqlalchemy import event

# SQLAlchemy instance (init in app)
db = SQLAlchemy()
bcrypt = Bcrypt()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode and other optimizations for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def init_db_events(app):
    """Initialize database event listeners for SQLite optimizations."""
    if app.config.get('SQLALCHEMY_DATABASE_URI', '').startswith('sqlite'):
        with app.app_context():
            event.listen(db.engine, "connect", _set_sqlite_pragma)

class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='editor')  # editor/admin

    def set_password(self, password):
        # bcrypt returns bytes, store as decoded UTF-8 string
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.username}>"

class Member(db.Model):
    __tablename__ = 'members'
    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    furigana = db.Column(db.String(200), nullable=False)  # phonetic reading
    nickname = db.Column(db.String(100), nullable=False)
    image = db.Column(db.String(500), nullable=False, default='')  # avatar URL
    role = db.Column(db.String(100), nullable=False, index=True)
    part_time_job = db.Column(db.String(200), nullable=False, default='')
    description = db.Column(db.Text, nullable=False)
    age = db.Column(db.Integer, nullable=False)
    join_reason = db.Column(db.Text, nullable=False)
    goal = db.Column(db.Text, nullable=False)
    message = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def to_dict(self):
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'furigana': self.furigana,
            'nickname': self.nickname,
            'image': self.image or '',
            'role': self.role,
            'part_time_job': self.part_time_job or '',
            'description': self.description,
            'age': self.age,
            'join_reason': self.join_reason,
            'goal': self.goal,
            'message': self.message,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Member {self.id} {self.nickname}>"


class Audit(db.Model):
    __tablename__ = 'audit_logs'
    id = db.Column(db.Integer, primary_key=True)
    action = db.Column(db.String(200), nullable=False)
    actor_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    actor = db.relationship('User', backref='audit_logs', foreign_keys=[actor_id])
    target_type = db.Column(db.String(50), nullable=True)
    target_id = db.Column(db.Integer, nullable=True)
    details = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Audit {self.id} {self.action}>"


def log_action(actor_id, action, target_type=None, target_id=None, details=None):
    """Create an audit log entry and commit it."""
    a = Audit(actor_id=actor_id, action=action, target_type=target_type, target_id=target_id, details=details)
    db.session.add(a)
    try:
        db.session.commit()
    except Exception:
        # leave the session usable for the caller
        db.session.rollback()
        raise
    return a
