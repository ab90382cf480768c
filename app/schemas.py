# app/schemas.py
"""Typed request schema for member registration and edits."""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as SchemaError
from pydantic.alias_generators import to_camel

from app.errors import ValidationError

MIN_AGE = 18
MAX_AGE = 100

REQUIRED_FIELDS = (
    'first_name', 'last_name', 'furigana', 'nickname', 'role',
    'description', 'age', 'join_reason', 'goal', 'message',
)


class MemberForm(BaseModel):
    """Member fields accepted from the registration and edit forms.

    Field names are snake_case; the camelCase names used by the JavaScript
    frontend (``firstName``, ``partTimeJob``, ...) are accepted too.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    furigana: str = Field(..., min_length=1, max_length=200)
    nickname: str = Field(..., min_length=1, max_length=100)
    role: str = Field(..., min_length=1, max_length=100)
    part_time_job: str = Field('', max_length=200)
    description: str = Field(..., min_length=1)
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    join_reason: str = Field(..., min_length=1)
    goal: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    image: str = Field('', max_length=500)

    @field_validator('part_time_job', 'image', mode='before')
    @classmethod
    def empty_when_missing(cls, v: Any) -> Any:
        return '' if v is None else v

    def to_columns(self) -> dict:
        """Column values for :class:`models.Member`."""
        return self.model_dump()


def _lookup(data: Mapping, name: str):
    if name in data:
        return data[name]
    return data.get(to_camel(name))


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(data: Mapping) -> list:
    """Names of required fields that are absent or blank in ``data``."""
    return [name for name in REQUIRED_FIELDS if _is_blank(_lookup(data, name))]


def parse_member_form(data: Mapping) -> MemberForm:
    """Validate raw form or JSON data into a :class:`MemberForm`.

    Raises:
        ValidationError: a required field is empty, age is not a whole
            number in range, a value exceeds its column length, or ``data``
            is not a mapping of fields.
    """
    if hasattr(data, 'to_dict'):
        # werkzeug MultiDict: keep the first value per key
        data = data.to_dict()
    if not isinstance(data, Mapping):
        raise ValidationError('Request body must be an object of member fields')

    missing = missing_fields(data)
    if missing:
        raise ValidationError(fields=missing)

    try:
        return MemberForm.model_validate(data)
    except SchemaError as exc:
        fields = []
        for err in exc.errors():
            loc = err.get('loc') or ('',)
            fields.append(str(loc[0]))
        if 'age' in fields:
            message = f'Age must be a whole number between {MIN_AGE} and {MAX_AGE}'
        else:
            message = f'Invalid value for: {", ".join(sorted(set(fields)))}'
        raise ValidationError(message, fields=fields) from exc
