"""
Old gold exchange ledger.

Gold brought in by the customer is valued at weight x rate and credited
against the bill before GST. Particulars and HSN code travel in the
exchange row's ``notes`` field as ``"Description: X | HSN Code: Y"``.
"""

from dataclasses import dataclass
from decimal import Decimal

from django.core.exceptions import ValidationError

from apps.billing.rounding import ZERO, round_currency, to_decimal

DESCRIPTION_LABEL = 'Description'
HSN_LABEL = 'HSN Code'
NOTES_SEPARATOR = ' | '


@dataclass(frozen=True)
class OldGoldCredit:
    weight: Decimal = ZERO
    rate: Decimal = ZERO
    total: Decimal = ZERO
    purity: str = ''
    hsn_code: str = ''
    particulars: str = ''

    @property
    def is_empty(self):
        return self.total <= 0

    @property
    def notes(self):
        return encode_notes(self.particulars, self.hsn_code)


def make_old_gold_credit(weight, rate=None, purity='', hsn_code='', particulars='', daily_rate=None):
    """
    Value old gold from the exchange form.

    A blank rate is filled from ``daily_rate`` (today's gold rate) once a
    weight has been entered.
    """
    weight = to_decimal(weight)
    rate_input = '' if rate is None else str(rate).strip()
    if rate_input == '' and weight > 0 and daily_rate is not None:
        rate_input = str(daily_rate)
    rate = to_decimal(rate_input)

    errors = {}
    if not weight.is_finite() or weight < 0:
        errors['weight'] = 'Old gold weight cannot be negative.'
    if not rate.is_finite() or rate < 0:
        errors['rate'] = 'Old gold rate cannot be negative.'
    if errors:
        raise ValidationError(errors)

    return OldGoldCredit(
        weight=weight,
        rate=rate,
        total=round_currency(weight * rate),
        purity=(purity or '').strip(),
        hsn_code=(hsn_code or '').strip(),
        particulars=(particulars or '').strip(),
    )


def encode_notes(particulars='', hsn_code=''):
    parts = []
    if particulars:
        parts.append(f"{DESCRIPTION_LABEL}: {particulars}")
    if hsn_code:
        parts.append(f"{HSN_LABEL}: {hsn_code}")
    return NOTES_SEPARATOR.join(parts)


def decode_notes(notes):
    """Split stored notes back into ``(particulars, hsn_code)``."""
    particulars, hsn_code = '', ''
    for part in (notes or '').split(NOTES_SEPARATOR.strip()):
        label, sep, value = part.strip().partition(':')
        if not sep:
            continue
        label = label.strip()
        if label == DESCRIPTION_LABEL:
            particulars = value.strip()
        elif label == HSN_LABEL:
            hsn_code = value.strip()
    return particulars, hsn_code
