"""
In-memory filtering and pagination shared by every list screen.

Each list screen loads all rows for its entity, applies the active predicates
conjunctively and slices the result into fixed-size pages. Predicate builders
return None when their input is blank or unparseable, so a screen can pass
raw form values straight through.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.core.paginator import Paginator
from django.utils import timezone
from django.utils.dateparse import parse_date

ALL = 'all'


def resolve(row, path):
    """Read a dotted attribute/key path from a model instance or dict."""
    value = row
    for part in path.split('.'):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _as_date(value):
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(str(value))


def _as_number(value):
    if value is None or value == '':
        return None
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def date_range(field, start=None, end=None):
    """Rows whose date falls within [start, end]; the end day is inclusive."""
    start, end = _as_date(start), _as_date(end)
    if start is None and end is None:
        return None

    def predicate(row):
        value = _as_date(resolve(row, field))
        if value is None:
            return False
        if start is not None and value < start:
            return False
        if end is not None and value > end:
            return False
        return True
    return predicate


def number_range(field, minimum=None, maximum=None):
    minimum, maximum = _as_number(minimum), _as_number(maximum)
    if minimum is None and maximum is None:
        return None

    def predicate(row):
        value = _as_number(resolve(row, field))
        if value is None:
            return False
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True
    return predicate


def contains(fields, term):
    """Case-insensitive substring match on any of the given fields."""
    term = (term or '').strip().lower()
    if not term:
        return None
    if isinstance(fields, str):
        fields = [fields]

    def predicate(row):
        for field in fields:
            value = resolve(row, field)
            if value is not None and term in str(value).lower():
                return True
        return False
    return predicate


def exact(field, value):
    """Exact enum match; blank or 'all' disables the filter."""
    if value is None or value == '' or value == ALL:
        return None
    value = str(value)

    def predicate(row):
        return str(resolve(row, field)) == value
    return predicate


def apply_filters(rows, predicates):
    """Return a new list of rows satisfying every active predicate."""
    active = [p for p in predicates if p is not None]
    return [row for row in rows if all(p(row) for p in active)]


def paginate(rows, page_number=1, per_page=None):
    """Slice rows into a Django Page; out-of-range pages clamp to the last page."""
    per_page = per_page or settings.SWARNA_PAGE_SIZE
    return Paginator(rows, per_page).get_page(page_number)
