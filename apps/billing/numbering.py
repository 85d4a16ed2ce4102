"""
Document numbers: ``SALE-YYYYMMDD-NNNN``, one sequence per day.

The next number is read from the latest document of the day. If that lookup
fails, or the latest number cannot be parsed, the document gets a
``SALE-<epoch millis>`` number instead so the save can still go through.
Purchase slips use the same scheme with the ``PUR`` prefix.
"""

import logging
import time

from django.db import DatabaseError
from django.utils import timezone

logger = logging.getLogger(__name__)

PREFIX = 'SALE'
SEQUENCE_WIDTH = 4


def day_prefix(bill_date, prefix=PREFIX):
    return f"{prefix}-{bill_date:%Y%m%d}-"


def format_bill_number(bill_date, sequence, prefix=PREFIX):
    return f"{day_prefix(bill_date, prefix)}{sequence:0{SEQUENCE_WIDTH}d}"


def next_bill_number(bill_date, latest=None, prefix=PREFIX):
    """
    Number that follows ``latest`` on ``bill_date``.

    Raises ValueError when ``latest`` does not end in a numeric sequence.
    """
    if not latest:
        return format_bill_number(bill_date, 1, prefix)
    last_seq = int(latest.rsplit('-', 1)[-1])
    return format_bill_number(bill_date, last_seq + 1, prefix)


def fallback_bill_number(prefix=PREFIX):
    return f"{prefix}-{int(time.time() * 1000)}"


def latest_number(queryset, field, prefix):
    """Most recently inserted ``field`` value starting with ``prefix``."""
    return (
        queryset.filter(**{f'{field}__startswith': prefix})
        .order_by('-pk')
        .values_list(field, flat=True)
        .first()
    )


def latest_bill_number(bill_date):
    from .models import Bill

    return latest_number(Bill.objects.all(), 'bill_no', day_prefix(bill_date))


def assign_number(doc_date, lookup, prefix=PREFIX):
    """Next number for ``doc_date`` using ``lookup(doc_date)`` for the latest one."""
    doc_date = doc_date or timezone.localdate()
    try:
        return next_bill_number(doc_date, lookup(doc_date), prefix)
    except (DatabaseError, ValueError) as e:
        logger.error(f"{prefix} number lookup failed, using fallback: {str(e)}")
        return fallback_bill_number(prefix)


def assign_bill_number(bill_date=None):
    return assign_number(bill_date, latest_bill_number)
