# app/seed.py
"""
Seed data loader.

Seed files are JSON lists in the nested team-members export
format::

    {"name": {"first": .., "last": .., "furikana": .., "nickname": ..},
     "image": {"full": ..}, "role": .., "part-time-job": .., "description": ..,
     "age": .., "join-reason": .., "goal": .., "message": ..}
"""

import json

from app.schemas import parse_member_form
from models import db, Member


def member_values(entry):
    """Flatten one seed entry into member form data."""
    name = entry.get('name') or {}
    image = entry.get('image') or {}
    return {
        'first_name': name.get('first'),
        'last_name': name.get('last'),
        'furigana': name.get('furikana'),
        'nickname': name.get('nickname'),
        'image': image.get('full') or '',
        'role': entry.get('role'),
        'part_time_job': entry.get('part-time-job') or '',
        'description': entry.get('description'),
        'age': entry.get('age'),
        'join_reason': entry.get('join-reason'),
        'goal': entry.get('goal'),
        'message': entry.get('message'),
    }


def load_seed_file(path):
    with open(path, encoding='utf-8') as fh:
        return json.load(fh)


def seed_members(entries):
    """Replace all members with ``entries``; returns the created members.

    Every entry is validated before anything is deleted, so a bad file
    leaves the table untouched.
    """
    forms = [parse_member_form(member_values(entry)) for entry in entries]

    Member.query.delete()
    members = [Member(**form.to_columns()) for form in forms]
    db.session.add_all(members)
    db.session.commit()
    return members
