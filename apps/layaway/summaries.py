"""
Per-bill layaway balances and the combined payments feed.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db.models import Sum

from .models import LayawayTransaction

ZERO = Decimal('0')


@dataclass(frozen=True)
class LayawaySummary:
    bill: object
    total_amount: Decimal
    total_paid: Decimal
    transaction_count: int
    last_payment_date: Optional[date]

    @property
    def remaining(self):
        return self.total_amount - self.total_paid

    @property
    def is_settled(self):
        return self.remaining <= 0

    @property
    def status(self):
        return 'completed' if self.is_settled else 'active'


def summarize_bill(bill, transactions=None):
    if transactions is None:
        transactions = list(bill.layaway_transactions.all())
    return LayawaySummary(
        bill=bill,
        total_amount=bill.grand_total,
        total_paid=sum((t.amount for t in transactions), ZERO),
        transaction_count=len(transactions),
        last_payment_date=max((t.payment_date for t in transactions), default=None),
    )


def summarize_bills(transactions):
    """One summary per bill that has at least one layaway payment."""
    by_bill = {}
    for txn in transactions:
        by_bill.setdefault(txn.bill_id, []).append(txn)
    summaries = [summarize_bill(txns[0].bill, txns) for txns in by_bill.values()]
    return sorted(summaries, key=lambda s: (s.last_payment_date, s.bill.pk), reverse=True)


def remaining_balance(bill, exclude=None):
    """Amount still owed on ``bill``, ignoring transaction ``exclude`` (when editing it)."""
    paid = LayawayTransaction.objects.filter(bill=bill)
    if exclude is not None and exclude.pk:
        paid = paid.exclude(pk=exclude.pk)
    return bill.grand_total - (paid.aggregate(total=Sum('amount'))['total'] or ZERO)


@dataclass(frozen=True)
class PaymentEntry:
    kind: str
    pk: int
    payment_date: date
    amount: Decimal
    bill: object
    status: str
    method: str = ''
    reference: str = ''

    @property
    def customer(self):
        return self.bill.customer


def payment_feed(bookings, transactions):
    """Advance bookings and layaway payments as one list, newest first."""
    entries = [
        PaymentEntry(
            kind='advance',
            pk=booking.pk,
            payment_date=booking.booking_date,
            amount=booking.advance_amount,
            bill=booking.bill,
            status=booking.booking_status,
            method='advance',
        )
        for booking in bookings
    ]
    entries += [
        PaymentEntry(
            kind='layaway',
            pk=txn.pk,
            payment_date=txn.payment_date,
            amount=txn.amount,
            bill=txn.bill,
            status='completed',
            method=txn.payment_method,
            reference=txn.reference_number,
        )
        for txn in transactions
    ]
    return sorted(entries, key=lambda e: (e.payment_date, e.kind, e.pk), reverse=True)
