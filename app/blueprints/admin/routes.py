# app/blueprints/admin/routes.py
"""
Dashboard routes - search, paginate, edit, delete and export team members
"""

from datetime import datetime
from io import BytesIO

from flask import render_template, redirect, url_for, flash, request, current_app, send_file, abort
from flask_login import current_user

from app.errors import MemberError, NotFound
from app.listing import MemberListView
from app.services import get_member_service
from decorators import role_required
from models import log_action
from utils import get_distinct_roles
from . import admin_bp


def _list_params(source):
    """Search/page params to carry across redirects."""
    params = {}
    q = source.get('q', '').strip()
    if q:
        params['q'] = q
    page = source.get('page', type=int)
    if page and page > 1:
        params['page'] = page
    return params


def _audit(action, member_id, details):
    try:
        log_action(current_user.id, action, 'member', member_id, details)
    except Exception:
        current_app.logger.exception(f'Failed to write audit log for {action}')


@admin_bp.route('')
@role_required('editor')
def dashboard():
    q = request.args.get('q', '').strip()
    page = request.args.get('page', 1, type=int)

    # always the authoritative list; never a cached copy
    members = get_member_service().list_members()
    view = MemberListView(members, query=q, page=page)

    return render_template('dashboard.html', view=view, q=q)


@admin_bp.route('/members/<int:member_id>/edit', methods=['GET', 'POST'])
@role_required('editor')
def edit_member(member_id):
    service = get_member_service()
    try:
        member = service.get_member(member_id)
    except NotFound:
        abort(404)

    if request.method == 'POST':
        try:
            member = service.update_member(member_id, request.form, request.files.get('avatar'))
        except MemberError as e:
            flash(e.message, 'danger')
            return render_template('edit_member.html', member=member, form=request.form,
                                   roles=get_distinct_roles(), list_params=_list_params(request.form)), e.status_code

        _audit('member.update', member.id, f'nickname={member.nickname}')
        current_app.logger.info(f'Member updated: {member.id} by {current_user.username}')
        flash(f'Member #{member.id} ({member.full_name}) updated', 'success')
        return redirect(url_for('admin.dashboard', **_list_params(request.form)))

    return render_template('edit_member.html', member=member, form=member.to_dict(),
                           roles=get_distinct_roles(), list_params=_list_params(request.args))


@admin_bp.route('/members/<int:member_id>/delete', methods=['POST'])
@role_required('admin')
def delete_member(member_id):
    try:
        deleted = get_member_service().delete_member(member_id)
    except NotFound:
        flash('Team member not found - the list has been refreshed', 'warning')
        return redirect(url_for('admin.dashboard', **_list_params(request.form)))
    except MemberError as e:
        flash(e.message, 'danger')
        return redirect(url_for('admin.dashboard', **_list_params(request.form)))

    _audit('member.delete', member_id, f'nickname={deleted["nickname"]}')
    current_app.logger.info(f'Member deleted: {member_id} by {current_user.username}')
    flash(f'Member #{member_id} ({deleted["first_name"]} {deleted["last_name"]}) deleted', 'danger')
    return redirect(url_for('admin.dashboard', **_list_params(request.form)))


@admin_bp.route('/export')
@role_required('editor')
def export():
    """Export the (optionally filtered) member list to Excel"""
    from openpyxl import Workbook
    from openpyxl.styles import Font, PatternFill, Alignment
    from openpyxl.utils import get_column_letter

    q = request.args.get('q', '').strip()
    view = MemberListView(get_member_service().list_members(), query=q)
    members = view.filtered

    if not members:
        flash('No members found to export', 'warning')
        return redirect(url_for('admin.dashboard', **_list_params(request.args)))

    wb = Workbook()
    ws = wb.active
    ws.title = 'Members'

    headers = ['ID', 'First name', 'Last name', 'Furigana', 'Nickname', 'Role',
               'Part-time job', 'Age', 'Joined', 'Image']
    ws.append(headers)

    # Style header row
    header_fill = PatternFill(start_color='366092', end_color='366092', fill_type='solid')
    header_font = Font(bold=True, color='FFFFFF')
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    for m in members:
        ws.append([
            m.id,
            m.first_name,
            m.last_name,
            m.furigana,
            m.nickname,
            m.role,
            m.part_time_job or '',
            m.age,
            m.created_at.strftime('%Y-%m-%d') if m.created_at else '',
            m.image or '',
        ])

    # Auto-size columns
    for i, col in enumerate(ws.columns, 1):
        max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in col)
        ws.column_dimensions[get_column_letter(i)].width = min(max_length + 2, 50)

    bio = BytesIO()
    wb.save(bio)
    bio.seek(0)

    log_details = f'q={q} count={len(members)}'
    try:
        log_action(current_user.id, 'members.export', 'export', None, log_details)
    except Exception:
        current_app.logger.exception('Failed to write audit log for export')
    current_app.logger.info(f'Export by {current_user.username}: {log_details}')

    filename = f"team_members_{datetime.now().strftime('%Y-%m-%d')}.xlsx"
    return send_file(bio, as_attachment=True, download_name=filename,
                     mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')
