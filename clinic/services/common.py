"""
Shared helpers for the entity services.

Input coming from JSON bodies and query strings is loosely typed, so the
coercion rules live here in one place: text is trimmed, integers may
arrive as numbers or numeric strings, timestamps are ISO-8601.  Each
helper raises :class:`~clinic.exceptions.ValidationFailed` carrying the
caller's error code, which is what the API returns.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, fields
from datetime import timezone as dt_timezone
from functools import reduce
from typing import Any, Iterable, Optional

from django.db.models import Q, QuerySet
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from clinic.exceptions import ValidationFailed

DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Integer columns and offsets are signed 64-bit in the database.
MAX_DB_INT = 2 ** 63 - 1
MAX_PAGE = MAX_DB_INT // MAX_LIMIT

_INT_RE = re.compile(r'-?[0-9]+')


class _Unset:
    """Marker for a field that was not supplied in a partial update."""

    def __repr__(self) -> str:
        return 'UNSET'

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class ChangeSet:
    """Base for per-entity partial updates.

    Every field defaults to :data:`UNSET`; a field holding any other value,
    ``None`` included, was supplied by the client and will be written.
    """

    def supplied(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.supplied()

    def apply_to(self, instance) -> list[str]:
        changed = self.supplied()
        for name, value in changed.items():
            setattr(instance, name, value)
        return list(changed)


def now_iso() -> str:
    """Current UTC time as ``2024-10-15T09:30:00.000Z``."""
    now = timezone.now().astimezone(dt_timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def ensure_body(data) -> dict:
    if not isinstance(data, dict):
        raise ValidationFailed('INVALID_BODY', 'Request body must be a JSON object')
    return data


def parse_int(value) -> Optional[int]:
    """Integer from a JSON number or numeric string, else ``None``."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        value = value.strip()
        return int(value) if _INT_RE.fullmatch(value) else None
    return None


def clean_text(value) -> Optional[str]:
    """Trimmed string, or ``None`` if the value is not a non-blank string."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def require_text(data: dict, field: str, code: str, message: str) -> str:
    value = clean_text(data.get(field))
    if value is None:
        raise ValidationFailed(code, message)
    return value


def in_db_range(value: int) -> bool:
    return -MAX_DB_INT - 1 <= value <= MAX_DB_INT


def optional_text(value) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value.strip() or None


def is_iso_timestamp(value) -> bool:
    if not isinstance(value, str) or not value.strip():
        return False
    value = value.strip()
    try:
        return bool(parse_datetime(value) or parse_date(value))
    except ValueError:
        return False


def parse_id(query_params, label: str, *, required: bool) -> Optional[int]:
    raw = query_params.get('id')
    if raw is None or raw == '':
        if required:
            raise ValidationFailed('MISSING_REQUIRED_FIELD', f'{label} ID is required')
        return None
    pk = parse_int(raw)
    if pk is None or not in_db_range(pk):
        raise ValidationFailed('INVALID_ID', 'Valid ID is required')
    return pk


@dataclass(frozen=True)
class ListParams:
    page: int = 1
    limit: int = DEFAULT_LIMIT
    q: Optional[str] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(cls, query_params) -> 'ListParams':
        limit = parse_int(query_params.get('limit'))
        page = parse_int(query_params.get('page'))
        limit = DEFAULT_LIMIT if limit is None else min(max(limit, 1), MAX_LIMIT)
        page = 1 if page is None else min(max(page, 1), MAX_PAGE)
        q = (query_params.get('q') or '').strip() or None
        return cls(page=page, limit=limit, q=q)


def search(qs: QuerySet, q: Optional[str], search_fields: Iterable[str]) -> QuerySet:
    """Case-insensitive substring match of ``q`` on any of ``search_fields``."""
    if not q:
        return qs
    clauses = [Q(**{f'{name}__icontains': q}) for name in search_fields]
    return qs.filter(reduce(lambda a, b: a | b, clauses))


def paginate(qs: QuerySet, params: ListParams) -> list:
    return list(qs[params.offset:params.offset + params.limit])
