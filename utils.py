"""
Utility functions for the application.
"""
import os
from typing import Optional

from app.extensions import cache
from models import db, Member


@cache.memoize(timeout=900)
def get_distinct_roles():
    """Get distinct member roles from database (form autocomplete)"""
    return [r[0] for r in db.session.query(Member.role).distinct()
            .filter(Member.role != None, Member.role != '')
            .order_by(Member.role).all()]


def clear_member_cache():
    """Clear cached member lookups - call after adding/editing/deleting members."""
    cache.delete_memoized(get_distinct_roles)


def stream_size(stream) -> int:
    """
    Size in bytes of a seekable file-like object.

    The stream position is restored to the start so the caller can read
    the full content afterwards.
    """
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def parse_integer(value_str: str, default: Optional[int] = None) -> Optional[int]:
    """
    Parse integer value.

    Args:
        value_str: Integer string to parse
        default: Default value to return if parsing fails (default: None)

    Returns:
        Parsed integer value or default if parsing fails

    Examples:
        >>> parse_integer('42')
        42
        >>> parse_integer('invalid')
        None
    """
    if not value_str or not value_str.strip():
        return default

    value_str = value_str.strip()

    try:
        return int(value_str)
    except ValueError:
        return default
