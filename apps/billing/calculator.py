"""
Bill calculator.

Pure value types for a bill being assembled at the counter and the rules that
turn them into totals. Nothing here touches the database: views build a
``BillDraft``, optionally reconcile it against a typed target payable, and
hand it to ``calculate_bill``.

Every ``with_*`` method returns a new draft; drafts and items are never
mutated in place.
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Optional, Tuple

from django.conf import settings
from django.core.exceptions import ValidationError

from apps.old_gold.ledger import OldGoldCredit
from .rounding import ZERO, round_gst_whole, round_whole, to_decimal

logger = logging.getLogger(__name__)

SALE_GST = 'gst'
SALE_NON_GST = 'non_gst'
SALE_TYPES = (SALE_GST, SALE_NON_GST)

DEFAULT_GST_RATE = Decimal('0.03')


def get_gst_rate():
    """Combined GST rate (CGST + SGST), 3% unless overridden in settings."""
    return to_decimal(getattr(settings, 'SWARNA_GST_RATE', DEFAULT_GST_RATE), DEFAULT_GST_RATE)


@dataclass(frozen=True)
class LineItem:
    """One priced article on a bill. Line items carry no tax of their own."""
    item_name: str
    weight: Decimal
    rate: Decimal
    making_charges: Decimal = ZERO
    barcode: str = ''
    item_id: Optional[int] = None

    @property
    def line_total(self):
        return self.weight * self.rate + self.making_charges


def make_line_item(item_name, weight, rate, making_charges=None, barcode='', item_id=None):
    """Build a validated ``LineItem`` from raw form values."""
    errors = {}
    item_name = (item_name or '').strip()
    weight = to_decimal(weight, None)
    rate = to_decimal(rate, None)
    making_charges = to_decimal(making_charges, ZERO)

    if not item_name:
        errors['item_name'] = 'Item name is required.'
    if weight is None or not weight.is_finite() or weight <= 0:
        errors['weight'] = 'Weight must be greater than zero.'
    if rate is None or not rate.is_finite() or rate < 0:
        errors['rate'] = 'Rate must be zero or more.'
    if not making_charges.is_finite() or making_charges < 0:
        errors['making_charges'] = 'Making charges cannot be negative.'
    if errors:
        raise ValidationError(errors)

    return LineItem(
        item_name=item_name,
        weight=weight,
        rate=rate,
        making_charges=making_charges,
        barcode=(barcode or '').strip(),
        item_id=item_id,
    )


@dataclass(frozen=True)
class Surcharge:
    """
    The "MC / Value Added" charge added to the taxable base.

    ``clamped`` is set when a typed target payable would have needed a
    negative surcharge and zero was used instead.
    """
    weight: Decimal = ZERO
    rate: Decimal = ZERO
    total: Decimal = ZERO
    clamped: bool = False

    @classmethod
    def from_inputs(cls, weight=None, rate=None):
        weight = to_decimal(weight)
        rate = to_decimal(rate)
        return cls(weight=weight, rate=rate, total=round_whole(weight * rate))

    @classmethod
    def from_total(cls, total):
        return cls(total=round_whole(total))

    @property
    def is_zero(self):
        return self.total == 0


def solve_surcharge(base_taxable, target_payable, sale_type, current_weight=ZERO, current_rate=ZERO):
    """
    Work out the surcharge that makes the bill come to ``target_payable``.

    With a weight already entered the rate is solved; otherwise with a rate
    entered the weight is solved; otherwise only the total is set.
    """
    base_taxable = to_decimal(base_taxable)
    target_payable = to_decimal(target_payable)
    current_weight = to_decimal(current_weight)
    current_rate = to_decimal(current_rate)

    if sale_type == SALE_GST:
        target_taxable = target_payable / (1 + get_gst_rate())
    else:
        target_taxable = target_payable

    required = target_taxable - base_taxable
    if required < 0:
        logger.warning(
            f"Target payable {target_payable} is below the taxable base {base_taxable}; "
            f"surcharge clamped to 0"
        )
        return Surcharge(clamped=True)

    total = round_whole(required)
    if current_weight != 0:
        return Surcharge(weight=current_weight, rate=required / current_weight, total=total)
    if current_rate != 0:
        return Surcharge(weight=required / current_rate, rate=current_rate, total=total)
    return Surcharge(total=total)


@dataclass(frozen=True)
class BillDraft:
    """Everything typed into the billing screen, before it is saved."""
    items: Tuple[LineItem, ...] = ()
    surcharge: Surcharge = field(default_factory=Surcharge)
    old_gold: Optional[OldGoldCredit] = None
    sale_type: str = SALE_GST
    discount: Decimal = ZERO
    target_payable: Optional[Decimal] = None

    def __post_init__(self):
        if self.sale_type not in SALE_TYPES:
            raise ValidationError({'sale_type': f"Unknown sale type '{self.sale_type}'."})

    def with_item(self, item):
        return replace(self, items=self.items + (item,))

    def without_item(self, index):
        if not 0 <= index < len(self.items):
            raise IndexError(f"No line item at position {index}")
        return replace(self, items=self.items[:index] + self.items[index + 1:])

    def with_items(self, items):
        return replace(self, items=tuple(items))

    def with_surcharge(self, weight=None, rate=None):
        return replace(self, surcharge=Surcharge.from_inputs(weight, rate))

    def with_surcharge_total(self, total):
        return replace(self, surcharge=Surcharge.from_total(total))

    def with_old_gold(self, credit):
        if credit is not None and credit.is_empty:
            credit = None
        return replace(self, old_gold=credit)

    def with_sale_type(self, sale_type):
        return replace(self, sale_type=sale_type)

    def with_discount(self, discount):
        discount = to_decimal(discount)
        if not discount.is_finite() or discount < 0:
            raise ValidationError({'discount': 'Discount cannot be negative.'})
        return replace(self, discount=discount)

    def with_target_payable(self, value):
        """Blank, zero or junk input clears the override."""
        target = to_decimal(value, None)
        if target is None or not target.is_finite() or target <= 0:
            target = None
        return replace(self, target_payable=target)

    @property
    def subtotal(self):
        return sum((item.line_total for item in self.items), ZERO)

    @property
    def old_gold_total(self):
        return self.old_gold.total if self.old_gold else ZERO

    @property
    def base_taxable(self):
        return self.subtotal - self.old_gold_total

    @property
    def has_override(self):
        return self.target_payable is not None

    def reconciled(self):
        """Return a draft whose surcharge meets the typed target payable."""
        if not self.has_override:
            return self
        surcharge = solve_surcharge(
            self.base_taxable, self.target_payable, self.sale_type,
            self.surcharge.weight, self.surcharge.rate,
        )
        return replace(self, surcharge=surcharge)


@dataclass(frozen=True)
class BillTotals:
    subtotal: Decimal
    old_gold_total: Decimal
    base_taxable: Decimal
    surcharge_total: Decimal
    pre_gst_total: Decimal
    calculated_grand_total: Decimal
    final_amount: Decimal
    bill_level_gst: Decimal
    cgst: Decimal
    sgst: Decimal
    igst: Decimal
    discount: Decimal
    has_override: bool = False
    surcharge_clamped: bool = False

    @property
    def gst_amount(self):
        return self.cgst + self.sgst + self.igst

    @property
    def amount_payable(self):
        return self.final_amount

    @property
    def grand_total(self):
        return self.calculated_grand_total

    def as_dict(self):
        """JSON-friendly view used by the live preview."""
        data = {}
        for name in ('subtotal', 'old_gold_total', 'base_taxable', 'surcharge_total',
                     'pre_gst_total', 'calculated_grand_total', 'final_amount',
                     'bill_level_gst', 'cgst', 'sgst', 'igst', 'discount', 'gst_amount'):
            data[name] = str(getattr(self, name).quantize(Decimal('0.01')))
        data['has_override'] = self.has_override
        data['surcharge_clamped'] = self.surcharge_clamped
        return data


def calculate_bill(draft):
    """Derive every bill total from a draft."""
    gst_rate = get_gst_rate()
    is_gst = draft.sale_type == SALE_GST

    subtotal = draft.subtotal
    base_taxable = subtotal - draft.old_gold_total
    pre_gst_total = base_taxable + draft.surcharge.total
    calculated_grand_total = pre_gst_total * (1 + gst_rate) if is_gst else pre_gst_total

    final_amount = draft.target_payable if draft.has_override else calculated_grand_total

    # GST is backed out of whatever the customer actually pays
    gst_raw = final_amount - final_amount / (1 + gst_rate) if is_gst else ZERO
    bill_level_gst = round_gst_whole(gst_raw)
    half = round_gst_whole(bill_level_gst / 2)

    return BillTotals(
        subtotal=subtotal,
        old_gold_total=draft.old_gold_total,
        base_taxable=base_taxable,
        surcharge_total=draft.surcharge.total,
        pre_gst_total=pre_gst_total,
        calculated_grand_total=calculated_grand_total,
        final_amount=final_amount,
        bill_level_gst=bill_level_gst,
        cgst=half,
        sgst=half,
        igst=ZERO,
        discount=draft.discount,
        has_override=draft.has_override,
        surcharge_clamped=draft.surcharge.clamped,
    )
