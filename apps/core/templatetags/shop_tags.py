"""
Template filters for currency and status display.
"""

from decimal import Decimal, InvalidOperation

from django import template

from apps.core.utils import get_status_badge_class

register = template.Library()


@register.filter
def inr(value):
    """Format a number as rupees with two decimals and Indian digit grouping."""
    try:
        amount = Decimal(str(value if value not in (None, '') else 0))
    except (InvalidOperation, ValueError):
        return value
    sign = '-' if amount < 0 else ''
    whole, _, paise = f"{abs(amount):.2f}".partition('.')
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ','.join(groups + [tail])
    return f"{sign}₹{whole}.{paise}"


@register.filter
def status_badge(status):
    return get_status_badge_class(status)
