# app/blueprints/api/routes.py
"""
JSON API for team members.

Paths match the frontend client: ``/api/register``,
``/api/team-member/<id>``, ``/api/avatar/update``,
``/api/avatar/upload``.
"""

from io import BytesIO

from flask import jsonify, request, current_app
from flask_login import current_user

from app.errors import MemberError, ValidationError
from app.grid import build_layout, column_count, drag_bounds, INITIAL_PLANE, viewport_size
from app.services import get_member_service
from decorators import role_required
from models import log_action
from utils import parse_integer
from . import api_bp


def _payload():
    """Form fields for multipart/urlencoded requests, the body for JSON."""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form


def _audit(action, member_id, details):
    actor_id = current_user.id if current_user.is_authenticated else None
    try:
        log_action(actor_id, action, 'member', member_id, details)
    except Exception:
        current_app.logger.exception(f'Failed to write audit log for {action}')


@api_bp.errorhandler(MemberError)
def member_error(e):
    return jsonify({'success': False, 'error': e.message}), e.status_code


@api_bp.route('/register', methods=['POST'])
def register():
    service = get_member_service()
    member = service.create_member(_payload(), request.files.get('avatar'))
    _audit('member.create', member.id, f'nickname={member.nickname}')
    return jsonify({'success': True, 'data': member.to_dict()}), 201


@api_bp.route('/team-members')
def list_members():
    members = get_member_service().list_members()
    return jsonify({'success': True, 'data': [m.to_dict() for m in members]})


@api_bp.route('/team-member/<int:member_id>')
def get_member(member_id):
    member = get_member_service().get_member(member_id)
    return jsonify({'success': True, 'data': member.to_dict()})


@api_bp.route('/team-member/<int:member_id>', methods=['PATCH'])
@role_required('editor')
def update_member(member_id):
    service = get_member_service()
    member = service.update_member(member_id, _payload(), request.files.get('avatar'))
    _audit('member.update', member.id, f'nickname={member.nickname}')
    current_app.logger.info(f'Member updated via API: {member.id} by {current_user.username}')
    return jsonify({'success': True, 'data': member.to_dict()})


@api_bp.route('/team-member/<int:member_id>', methods=['DELETE'])
@role_required('admin')
def delete_member(member_id):
    deleted = get_member_service().delete_member(member_id)
    _audit('member.delete', member_id, f'nickname={deleted["nickname"]}')
    current_app.logger.info(f'Member deleted via API: {member_id} by {current_user.username}')
    return jsonify({'success': True, 'message': 'Team member deleted successfully'})


@api_bp.route('/avatar/update', methods=['POST'])
@role_required('editor')
def update_avatar():
    member_id = parse_integer(request.form.get('memberId', ''))
    if member_id is None:
        raise ValidationError('Member ID is required', fields=['memberId'])
    member = get_member_service().update_avatar(member_id, request.files.get('avatar'))
    _audit('member.avatar', member.id, f'image={member.image}')
    return jsonify({'success': True, 'data': member.to_dict()})


@api_bp.route('/avatar/upload', methods=['POST'])
def upload_avatar():
    """Raw request body stored as a blob; the URL can be sent as ``image`` to /register."""
    filename = request.args.get('filename', '').strip()
    # request.stream is not seekable; MAX_CONTENT_LENGTH bounds the read
    body = BytesIO(request.get_data())
    url = get_member_service().upload_avatar(filename, body, request.mimetype or None)
    current_app.logger.info(f'Avatar uploaded via API: {url}')
    return jsonify({'success': True, 'data': {'url': url}}), 201


@api_bp.route('/grid')
def grid():
    width, height = viewport_size(request.args)
    members = get_member_service().list_members()
    slots = build_layout(members, width, height)
    return jsonify({
        'columns': column_count(width),
        'plane': {'x': INITIAL_PLANE[0], 'y': INITIAL_PLANE[1]},
        'drag_bounds': drag_bounds(width),
        'slots': [s.to_dict() for s in slots],
    })
