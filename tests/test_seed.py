import json
import os

import pytest

from app.errors import ValidationError
from app.seed import load_seed_file, member_values, seed_members
from models import Member, User
from conftest import make_member

SEED_FILE = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data', 'team-members.json')


def entry(**overrides):
    e = {
        'name': {'first': 'Dai', 'last': 'Kato', 'furikana': 'かとう だい', 'nickname': 'Dai'},
        'image': {'full': 'https://example.com/dai.png'},
        'role': 'Engineer',
        'part-time-job': 'Barista',
        'description': 'desc',
        'age': 22,
        'join-reason': 'reason',
        'goal': 'goal',
        'message': 'msg',
    }
    e.update(overrides)
    return e


def test_member_values_flattens_entry():
    values = member_values(entry())
    assert values['first_name'] == 'Dai'
    assert values['furigana'] == 'かとう だい'
    assert values['image'] == 'https://example.com/dai.png'
    assert values['part_time_job'] == 'Barista'
    assert values['join_reason'] == 'reason'


def test_seed_replaces_existing_members(app):
    make_member(nickname='old')
    members = seed_members([entry(), entry(name={'first': 'Eri', 'last': 'Abe', 'furikana': 'あべ えり', 'nickname': 'Eri'})])
    assert len(members) == 2
    assert [m.nickname for m in Member.query.order_by(Member.id).all()] == ['Dai', 'Eri']


def test_invalid_entry_leaves_table_untouched(app):
    make_member(nickname='keep')
    with pytest.raises(ValidationError):
        seed_members([entry(), entry(age=12)])
    assert [m.nickname for m in Member.query.all()] == ['keep']


def test_bundled_seed_file_is_valid(app):
    entries = load_seed_file(SEED_FILE)
    members = seed_members(entries)
    assert len(members) == len(entries) == Member.query.count()


def test_seed_members_command(app, tmp_path):
    path = tmp_path / 'seed.json'
    path.write_text(json.dumps([entry()]), encoding='utf-8')
    result = app.test_cli_runner().invoke(args=['seed-members', str(path)])
    assert result.exit_code == 0
    assert 'Created team member: Dai Kato' in result.output
    assert Member.query.count() == 1


def test_seed_members_command_rejects_bad_file(app, tmp_path):
    path = tmp_path / 'seed.json'
    path.write_text(json.dumps([entry(role='')]), encoding='utf-8')
    result = app.test_cli_runner().invoke(args=['seed-members', str(path)])
    assert result.exit_code != 0
    assert 'Invalid seed entry' in result.output


def test_create_user_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-user', 'alice', 'secret', 'editor'])
    assert 'Created editor user alice' in result.output
    user = User.query.filter_by(username='alice').one()
    assert user.role == 'editor'
    assert user.check_password('secret')

    result = runner.invoke(args=['create-user', 'alice', 'again', 'admin'])
    assert 'User already exists.' in result.output
