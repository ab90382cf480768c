# app/services.py
"""
Member service: validation and orchestration between the views and storage.

Every operation validates its input before any side effect. Store and blob
failures are logged here and re-raised as :class:`StorageFailure` with a
generic message. Concurrent edits of the same member are not reconciled;
the last write wins.
"""

import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.errors import NotFound, PayloadTooLarge, StorageFailure, ValidationError
from app.schemas import MemberForm, parse_member_form
from models import Member, db
from utils import clear_member_cache, stream_size

logger = logging.getLogger(__name__)

MAX_AVATAR_BYTES = 4 * 1024 * 1024


def has_file(upload):
    """True when ``upload`` is an actual file (browsers send empty parts)."""
    return upload is not None and bool(getattr(upload, 'filename', None))


class MemberService:
    def __init__(self, session, blob_store, max_avatar_bytes=MAX_AVATAR_BYTES):
        self.session = session
        self.blob_store = blob_store
        self.max_avatar_bytes = max_avatar_bytes

    # -- reads -------------------------------------------------------------

    def list_members(self):
        """All members in ascending id order."""
        try:
            return self.session.query(Member).order_by(Member.id.asc()).all()
        except SQLAlchemyError as exc:
            logger.exception('Failed to list team members')
            raise StorageFailure('Failed to fetch team members') from exc

    def get_member(self, member_id):
        try:
            member = self.session.get(Member, member_id)
        except SQLAlchemyError as exc:
            logger.exception('Failed to fetch team member %s', member_id)
            raise StorageFailure('Failed to fetch team member') from exc
        if member is None:
            raise NotFound()
        return member

    # -- writes ------------------------------------------------------------

    def create_member(self, data, avatar=None):
        """Register a new member; returns it with the store-assigned id."""
        form = self._form(data)
        avatar = avatar if has_file(avatar) else None
        self._check_avatar(avatar)

        values = form.to_columns()
        if avatar is not None:
            values['image'] = self._upload(avatar)

        member = Member(**values)
        self.session.add(member)
        self._commit('Failed to register team member')
        logger.info('Team member created: %s (%s)', member.id, member.nickname)
        return member

    def update_member(self, member_id, data, avatar=None):
        """Replace all fields of a member; the image only changes with a new avatar."""
        form = self._form(data)
        member = self.get_member(member_id)
        avatar = avatar if has_file(avatar) else None
        self._check_avatar(avatar)

        image = member.image
        if avatar is not None:
            image = self._upload(avatar)

        values = form.to_columns()
        values['image'] = image
        for name, value in values.items():
            setattr(member, name, value)
        self._commit('Failed to update team member')
        logger.info('Team member updated: %s (%s)', member.id, member.nickname)
        return member

    def update_avatar(self, member_id, avatar):
        """Replace only the avatar image of a member."""
        if not has_file(avatar):
            raise ValidationError('Avatar file is required', fields=['avatar'])
        member = self.get_member(member_id)
        self._check_avatar(avatar)

        member.image = self._upload(avatar)
        self._commit('Failed to update avatar')
        logger.info('Avatar updated for team member %s', member.id)
        return member

    def upload_avatar(self, filename, stream, content_type=None):
        """Store an avatar without touching any member; returns its URL."""
        if not filename:
            raise ValidationError('Filename is required', fields=['filename'])
        if stream_size(stream) >= self.max_avatar_bytes:
            raise PayloadTooLarge()
        url = self.blob_store.put(filename, stream, content_type)
        logger.info('Avatar uploaded: %s', url)
        return url

    def delete_member(self, member_id):
        """Remove a member unconditionally; returns its last state as a dict."""
        member = self.get_member(member_id)
        snapshot = member.to_dict()
        self.session.delete(member)
        self._commit('Failed to delete team member')
        logger.info('Team member deleted: %s (%s)', member_id, snapshot['nickname'])
        return snapshot

    # -- helpers -----------------------------------------------------------

    def _form(self, data):
        if isinstance(data, MemberForm):
            return data
        return parse_member_form(data)

    def _check_avatar(self, avatar):
        if avatar is None:
            return
        if stream_size(avatar.stream) >= self.max_avatar_bytes:
            raise PayloadTooLarge()

    def _upload(self, avatar):
        # StorageFailure from the backend propagates unchanged
        return self.blob_store.put(avatar.filename, avatar.stream, avatar.mimetype)

    def _commit(self, failure_message):
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception(failure_message)
            raise StorageFailure(failure_message) from exc
        clear_member_cache()


def get_member_service():
    """Service bound to the current app's session and blob store."""
    return MemberService(
        db.session,
        current_app.extensions['blob_store'],
        current_app.config.get('MAX_AVATAR_BYTES', MAX_AVATAR_BYTES),
    )
