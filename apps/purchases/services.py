"""
Saving purchase slips (old gold bought over the counter).
"""

import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from apps.billing.numbering import assign_number, day_prefix, latest_number
from apps.billing.rounding import ZERO, round_currency, to_decimal
from apps.billing.services import BillingError
from apps.core.utils import log_audit_action
from .models import PurchaseBill, PurchaseItem

logger = logging.getLogger(__name__)

PURCHASE_PREFIX = 'PUR'


def latest_purchase_number(purchase_date):
    return latest_number(PurchaseBill.objects.all(), 'purchase_no',
                         day_prefix(purchase_date, PURCHASE_PREFIX))


def assign_purchase_number(purchase_date=None):
    return assign_number(purchase_date, latest_purchase_number, PURCHASE_PREFIX)


def item_amount(weight, rate):
    return round_currency(to_decimal(weight) * to_decimal(rate))


def purchase_totals(amounts, gst_rate=None):
    """
    Subtotal, CGST, SGST and grand total for a slip's item amounts.

    Each half of the GST is rounded to paise on its own.
    """
    if gst_rate is None:
        gst_rate = settings.SWARNA_PURCHASE_GST_RATE
    subtotal = round_currency(sum((to_decimal(a) for a in amounts), ZERO))
    half = round_currency(subtotal * to_decimal(gst_rate) / 2)
    return {
        'subtotal': subtotal,
        'cgst': half,
        'sgst': half,
        'grand_total': subtotal + half + half,
    }


def record_purchase(context, purchase, items):
    """
    Number, total and save ``purchase`` with its unsaved ``items``.

    Raises BillingError for read-only users and ValidationError for a slip
    with no items.
    """
    if not context.may_create_bills:
        raise BillingError('You do not have permission to record purchases.')
    items = [item for item in items if item.weight]
    if not items:
        raise ValidationError('Add at least one item to the purchase slip.')

    for item in items:
        item.amount = item_amount(item.weight, item.rate)
    totals = purchase_totals(item.amount for item in items)

    if not purchase.purchase_no:
        purchase.purchase_no = assign_purchase_number(purchase.purchase_date)
    purchase.staff_id = context.user_id
    for field, value in totals.items():
        setattr(purchase, field, value)

    with transaction.atomic():
        purchase.save()
        for item in items:
            item.purchase_bill = purchase
        PurchaseItem.objects.bulk_create(items)

    log_audit_action(
        context, 'create', 'purchase_bill', purchase.pk,
        f"Recorded purchase {purchase.purchase_no} for {purchase.grand_total}"
    )
    logger.info(f"Purchase {purchase.purchase_no} saved by {context.username}")
    return purchase


def delete_purchase(context, purchase):
    if not context.is_admin:
        raise BillingError('Only administrators can delete purchase slips.')
    purchase_no, purchase_id = purchase.purchase_no, purchase.pk
    purchase.delete()
    log_audit_action(context, 'delete', 'purchase_bill', purchase_id, f"Deleted purchase {purchase_no}")
