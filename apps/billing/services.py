"""
Saving and changing bills.

``persist_bill`` is the only way a bill reaches the database: the bill row,
its items (including the MC / value added line) and the old gold exchange
are written in one transaction, so a failure leaves nothing half saved.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from apps.core.utils import log_audit_action
from apps.inventory.models import Item
from apps.old_gold.ledger import OldGoldCredit, decode_notes
from apps.old_gold.models import OldGoldExchange
from .calculator import SALE_NON_GST, BillDraft, LineItem, Surcharge, calculate_bill
from .models import Bill, BillItem, SaleReturn, PAYMENT_TYPE_CHOICES, VALUE_ADDED_LABEL
from .numbering import assign_bill_number
from .rounding import ZERO, quantize_money, round_currency, to_decimal

logger = logging.getLogger(__name__)

PAYMENT_TYPES = {value for value, _ in PAYMENT_TYPE_CHOICES}


class BillingError(Exception):
    """A bill change refused by shop rules (permissions, bill state)."""


@dataclass(frozen=True)
class BillHeader:
    customer_id: Optional[int] = None
    bill_date: Optional[object] = None
    bill_status: str = Bill.STATUS_FINALIZED
    payments: Tuple[dict, ...] = ()
    remarks: str = ''


def normalize_payments(entries):
    """Clean ``{type, amount, reference}`` rows; rows without an amount are dropped."""
    payments = []
    for entry in entries or []:
        amount = to_decimal(entry.get('amount'), None)
        if amount is None or amount == 0:
            continue
        payment_type = (entry.get('type') or '').strip()
        if payment_type not in PAYMENT_TYPES:
            raise ValidationError(f"Unknown payment type '{payment_type}'.")
        if amount < 0:
            raise ValidationError('Payment amounts cannot be negative.')
        payments.append({
            'type': payment_type,
            'amount': str(quantize_money(amount)),
            'reference': (entry.get('reference') or '').strip(),
        })
    return tuple(payments)


def _check_can_save(context, draft, bill):
    if not context.may_create_bills:
        raise BillingError('You do not have permission to create bills.')
    if bill is not None:
        if not context.can_edit_bills:
            raise BillingError('You do not have permission to edit bills.')
        if bill.is_cancelled:
            raise BillingError(f"Bill {bill.bill_no} is cancelled and cannot be edited.")
        if bill.has_returns:
            raise BillingError(f"Bill {bill.bill_no} has returned items and cannot be edited.")
    if draft.sale_type == SALE_NON_GST and not context.may_sell_non_gst:
        raise BillingError('Non-GST sales need an authorised user.')
    if not draft.items:
        raise ValidationError('Add at least one item to the bill.')


def _resolve_stock_item(line):
    if line.item_id:
        return line.item_id
    if line.barcode:
        return Item.objects.filter(barcode=line.barcode).values_list('id', flat=True).first()
    return None


def _bill_items(bill, draft):
    rows = []
    for line in draft.items:
        rows.append(BillItem(
            bill=bill,
            item_id=_resolve_stock_item(line),
            barcode=line.barcode,
            item_name=line.item_name,
            weight=line.weight.quantize(Decimal('0.001')),
            rate=line.rate.quantize(Decimal('0.0001')),
            making_charges=quantize_money(line.making_charges),
            gst_rate=ZERO,
            line_total=quantize_money(line.line_total),
        ))
    surcharge = draft.surcharge
    if not surcharge.is_zero:
        rows.append(BillItem(
            bill=bill,
            item_name=VALUE_ADDED_LABEL,
            weight=surcharge.weight.quantize(Decimal('0.001')),
            rate=surcharge.rate.quantize(Decimal('0.0001')),
            making_charges=ZERO,
            gst_rate=ZERO,
            line_total=quantize_money(surcharge.total),
            is_value_added=True,
        ))
    return rows


def _save_old_gold(bill, credit):
    if credit is None or credit.is_empty:
        OldGoldExchange.objects.filter(bill=bill).delete()
        return None
    exchange, _ = OldGoldExchange.objects.update_or_create(
        bill=bill,
        defaults={
            'weight': credit.weight.quantize(Decimal('0.001')),
            'purity': credit.purity,
            'rate_per_gram': round_currency(credit.rate),
            'total_value': credit.total,
            'notes': credit.notes,
        },
    )
    return exchange


def _update_stock(previous_ids, current_ids, bill_status):
    released = set(previous_ids) - set(current_ids)
    if released:
        Item.objects.filter(id__in=released).update(stock_status=Item.STATUS_IN_STOCK)
    if current_ids:
        status = Item.STATUS_SOLD if bill_status == Bill.STATUS_FINALIZED else Item.STATUS_RESERVED
        Item.objects.filter(id__in=current_ids).update(stock_status=status)


def persist_bill(context, header, draft, bill=None):
    """
    Save a new bill or replace an existing one from ``draft``.

    Raises BillingError when the user may not make this change and
    ValidationError when the bill is incomplete.
    """
    _check_can_save(context, draft, bill)
    if header.bill_status not in (Bill.STATUS_DRAFT, Bill.STATUS_FINALIZED):
        raise BillingError('Use cancel to cancel a bill.')

    draft = draft.reconciled()
    totals = calculate_bill(draft)
    bill_date = header.bill_date or timezone.localdate()

    is_new = bill is None
    if is_new:
        # Numbered outside the transaction so a failed lookup cannot poison it
        bill = Bill(bill_no=assign_bill_number(bill_date), staff_id=context.user_id)

    with transaction.atomic():
        previous_ids = [] if is_new else list(
            bill.items.exclude(item=None).values_list('item_id', flat=True)
        )

        bill.bill_date = bill_date
        bill.customer_id = header.customer_id
        bill.sale_type = draft.sale_type
        bill.nongst_auth_id = context.user_id if draft.sale_type == SALE_NON_GST else None
        bill.subtotal = quantize_money(totals.subtotal)
        bill.cgst = quantize_money(totals.cgst)
        bill.sgst = quantize_money(totals.sgst)
        bill.igst = quantize_money(totals.igst)
        bill.gst_amount = quantize_money(totals.gst_amount)
        bill.discount = quantize_money(totals.discount)
        bill.grand_total = quantize_money(totals.grand_total)
        bill.amount_payable = quantize_money(totals.amount_payable)
        bill.payment_method = list(header.payments)
        bill.bill_status = header.bill_status
        bill.remarks = header.remarks
        bill.save()

        bill.items.all().delete()
        rows = BillItem.objects.bulk_create(_bill_items(bill, draft))
        _save_old_gold(bill, draft.old_gold)
        _update_stock(previous_ids, [row.item_id for row in rows if row.item_id], bill.bill_status)

    action = 'create' if is_new else 'update'
    log_audit_action(
        context, action, 'bill', bill.pk,
        f"{action.title()}d bill {bill.bill_no} ({bill.get_sale_type_display()}) "
        f"payable {bill.amount_payable}"
    )
    logger.info(f"Bill {bill.bill_no} saved by {context.username}")
    return bill


def load_bill_draft(bill):
    """Rebuild the header and draft a saved bill was made from."""
    items = tuple(
        LineItem(
            item_name=row.item_name,
            weight=row.weight,
            rate=row.rate,
            making_charges=row.making_charges,
            barcode=row.barcode,
            item_id=row.item_id,
        )
        for row in bill.sale_items
    )

    value_added = bill.value_added_item
    surcharge = Surcharge()
    if value_added is not None:
        surcharge = Surcharge(weight=value_added.weight, rate=value_added.rate,
                              total=value_added.line_total)

    old_gold = None
    exchange = OldGoldExchange.objects.filter(bill=bill).first()
    if exchange is not None:
        particulars, hsn_code = decode_notes(exchange.notes)
        old_gold = OldGoldCredit(
            weight=exchange.weight,
            rate=exchange.rate_per_gram,
            total=exchange.total_value,
            purity=exchange.purity,
            hsn_code=hsn_code,
            particulars=particulars,
        )

    draft = BillDraft(
        items=items,
        surcharge=surcharge,
        old_gold=old_gold,
        sale_type=bill.sale_type,
        discount=bill.discount,
        target_payable=bill.amount_payable if bill.has_payable_override else None,
    )
    header = BillHeader(
        customer_id=bill.customer_id,
        bill_date=bill.bill_date,
        bill_status=bill.bill_status,
        payments=tuple(bill.payment_method or ()),
        remarks=bill.remarks,
    )
    return header, draft


def _release_stock(bill):
    item_ids = list(bill.items.exclude(item=None).values_list('item_id', flat=True))
    if item_ids:
        # Returned articles keep their returned status
        Item.objects.filter(id__in=item_ids).exclude(stock_status=Item.STATUS_RETURNED).update(
            stock_status=Item.STATUS_IN_STOCK
        )


def cancel_bill(context, bill):
    if not (context.may_create_bills and context.can_edit_bills):
        raise BillingError('You do not have permission to cancel bills.')
    if bill.is_cancelled:
        raise BillingError(f"Bill {bill.bill_no} is already cancelled.")

    with transaction.atomic():
        bill.bill_status = Bill.STATUS_CANCELLED
        bill.save(update_fields=['bill_status', 'updated_at'])
        _release_stock(bill)

    log_audit_action(context, 'cancel', 'bill', bill.pk, f"Cancelled bill {bill.bill_no}")
    return bill


def delete_bill(context, bill):
    if not context.is_admin:
        raise BillingError('Only administrators can delete bills.')

    bill_no, bill_id = bill.bill_no, bill.pk
    with transaction.atomic():
        _release_stock(bill)
        bill.delete()

    log_audit_action(context, 'delete', 'bill', bill_id, f"Deleted bill {bill_no}")


def compute_refund(original_amount, deduction_percent):
    original_amount = to_decimal(original_amount)
    deduction_percent = to_decimal(deduction_percent)
    return round_currency(original_amount * (1 - deduction_percent / 100))


def process_return(context, bill_item, deduction_percent=None, reason=''):
    """Refund a sold line item and put its stock item back as returned."""
    if not context.may_create_bills:
        raise BillingError('You do not have permission to process returns.')
    if bill_item.is_value_added:
        raise BillingError('The MC / value added line cannot be returned.')
    if bill_item.bill.is_cancelled:
        raise BillingError(f"Bill {bill_item.bill.bill_no} is cancelled.")
    if bill_item.returns.exists():
        raise BillingError(f"{bill_item.item_name} has already been returned.")

    if deduction_percent is None:
        deduction_percent = settings.SWARNA_RETURN_DEDUCTION_PERCENT
    deduction_percent = to_decimal(deduction_percent)
    if deduction_percent < 0 or deduction_percent > 100:
        raise ValidationError('Deduction must be between 0 and 100 percent.')

    with transaction.atomic():
        sale_return = SaleReturn.objects.create(
            bill=bill_item.bill,
            bill_item=bill_item,
            original_amount=bill_item.line_total,
            deduction_percent=deduction_percent,
            refund_amount=compute_refund(bill_item.line_total, deduction_percent),
            reason=reason,
            processed_by_id=context.user_id,
        )
        if bill_item.item_id:
            Item.objects.filter(id=bill_item.item_id).update(stock_status=Item.STATUS_RETURNED)

    log_audit_action(
        context, 'return', 'bill', bill_item.bill_id,
        f"Returned {bill_item.item_name} from {bill_item.bill.bill_no}, refund {sale_return.refund_amount}"
    )
    return sale_return
