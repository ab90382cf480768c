# app/blueprints/directory/routes.py
"""
Public pages: landing grid, gallery, member profile and registration
"""

from flask import render_template, redirect, url_for, flash, request, current_app, abort, send_from_directory

from app.errors import MemberError, NotFound
from app.grid import build_layout, column_count, drag_bounds, ICON_SIZE, INITIAL_PLANE, viewport_size
from app.services import get_member_service
from models import log_action
from utils import get_distinct_roles
from . import directory_bp


@directory_bp.route('/')
def index():
    width, height = viewport_size(request.args)
    members = get_member_service().list_members()
    slots = build_layout(members, width, height)
    return render_template('index.html',
                           slots=slots,
                           columns=column_count(width),
                           plane=INITIAL_PLANE,
                           bounds=drag_bounds(width),
                           icon_size=ICON_SIZE,
                           width=width,
                           height=height)


@directory_bp.route('/team')
def team():
    members = get_member_service().list_members()
    return render_template('team.html', members=members)


@directory_bp.route('/team/<int:member_id>')
@directory_bp.route('/<int:member_id>')
def member_profile(member_id):
    try:
        member = get_member_service().get_member(member_id)
    except NotFound:
        abort(404)
    return render_template('member.html', member=member)


@directory_bp.route('/register', methods=['GET', 'POST'])
def register():
    roles = get_distinct_roles()

    if request.method == 'POST':
        try:
            member = get_member_service().create_member(request.form, request.files.get('avatar'))
        except MemberError as e:
            # keep the submitted values so the user can correct and resubmit
            flash(e.message, 'danger')
            return render_template('register.html', form=request.form, roles=roles), e.status_code

        try:
            log_action(None, 'member.create', 'member', member.id, f'nickname={member.nickname}')
        except Exception:
            current_app.logger.exception('Failed to write audit log for member.create')
        current_app.logger.info(f'Member registered: {member.id} ({member.nickname})')
        flash(f'Welcome, {member.nickname}!', 'success')
        return redirect(url_for('directory.index'))

    return render_template('register.html', form={}, roles=roles)


@directory_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
