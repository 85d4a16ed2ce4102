"""
Test cases for the bill calculator.
"""
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from apps.billing.calculator import (
    SALE_GST, SALE_NON_GST, BillDraft, LineItem, Surcharge, calculate_bill, make_line_item,
    solve_surcharge,
)
from apps.old_gold.ledger import make_old_gold_credit


def ten_thousand_draft(sale_type=SALE_GST):
    """One 10 g item at 1000/g, no making charges."""
    return BillDraft(sale_type=sale_type).with_item(make_line_item('Gold Chain', '10', '1000'))


class LineItemTest(SimpleTestCase):
    """Test cases for line item construction."""

    def test_line_total(self):
        item = make_line_item('Ring', '4.250', '6200', '850')
        self.assertEqual(item.line_total, Decimal('4.250') * Decimal('6200') + Decimal('850'))

    def test_blank_making_charges_are_zero(self):
        item = make_line_item('Ring', '2', '100', '')
        self.assertEqual(item.making_charges, Decimal('0'))
        self.assertEqual(item.line_total, Decimal('200'))

    def test_rejects_missing_name_and_bad_weight(self):
        with self.assertRaises(ValidationError) as ctx:
            make_line_item('  ', '0', '100')
        self.assertIn('item_name', ctx.exception.message_dict)
        self.assertIn('weight', ctx.exception.message_dict)

    def test_rejects_negative_making_charges(self):
        with self.assertRaises(ValidationError) as ctx:
            make_line_item('Ring', '1', '100', '-5')
        self.assertIn('making_charges', ctx.exception.message_dict)

    def test_items_are_immutable(self):
        item = make_line_item('Ring', '1', '100')
        with self.assertRaises(AttributeError):
            item.weight = Decimal('2')


class CalculateBillTest(SimpleTestCase):
    """Test cases for bill totals."""

    def test_gst_sale(self):
        totals = calculate_bill(ten_thousand_draft())
        self.assertEqual(totals.subtotal, Decimal('10000'))
        self.assertEqual(totals.pre_gst_total, Decimal('10000'))
        self.assertEqual(totals.calculated_grand_total, Decimal('10300'))
        self.assertEqual(totals.final_amount, Decimal('10300'))
        self.assertEqual(totals.bill_level_gst, Decimal('300'))
        self.assertEqual(totals.cgst, Decimal('150'))
        self.assertEqual(totals.sgst, Decimal('150'))
        self.assertEqual(totals.igst, Decimal('0'))
        self.assertEqual(totals.gst_amount, Decimal('300'))

    def test_non_gst_sale(self):
        totals = calculate_bill(ten_thousand_draft(SALE_NON_GST))
        self.assertEqual(totals.calculated_grand_total, Decimal('10000'))
        self.assertEqual(totals.bill_level_gst, Decimal('0'))
        self.assertEqual(totals.gst_amount, Decimal('0'))

    def test_old_gold_credit_reduces_taxable_base(self):
        credit = make_old_gold_credit('2', '1000')
        draft = ten_thousand_draft().with_old_gold(credit)
        totals = calculate_bill(draft)
        self.assertEqual(totals.old_gold_total, Decimal('2000'))
        self.assertEqual(totals.base_taxable, Decimal('8000'))
        self.assertEqual(totals.calculated_grand_total, Decimal('8240'))

    def test_subtotal_is_sum_of_line_totals(self):
        items = [
            make_line_item('Chain', '10.5', '6000', '1200'),
            make_line_item('Ring', '3.125', '6100', '450'),
            make_line_item('Stud', '1', '5000'),
        ]
        draft = BillDraft().with_items(items)
        self.assertEqual(calculate_bill(draft).subtotal, sum(i.line_total for i in items))

    def test_surcharge_is_taxed(self):
        draft = ten_thousand_draft().with_surcharge_total('500')
        totals = calculate_bill(draft)
        self.assertEqual(totals.pre_gst_total, Decimal('10500'))
        self.assertEqual(totals.calculated_grand_total, Decimal('10815'))

    def test_gst_backed_out_of_target_payable(self):
        draft = ten_thousand_draft().with_target_payable('12000').reconciled()
        totals = calculate_bill(draft)
        self.assertEqual(totals.final_amount, Decimal('12000'))
        # 12000 - 12000/1.03 = 349.51
        self.assertEqual(totals.bill_level_gst, Decimal('350'))
        self.assertEqual(totals.cgst, Decimal('175'))

    def test_discount_is_informational(self):
        totals = calculate_bill(ten_thousand_draft().with_discount('250'))
        self.assertEqual(totals.discount, Decimal('250'))
        self.assertEqual(totals.final_amount, Decimal('10300'))

    @override_settings(SWARNA_GST_RATE=Decimal('0.05'))
    def test_gst_rate_from_settings(self):
        totals = calculate_bill(ten_thousand_draft())
        self.assertEqual(totals.calculated_grand_total, Decimal('10500'))

    def test_as_dict_is_json_friendly(self):
        data = calculate_bill(ten_thousand_draft()).as_dict()
        self.assertEqual(data['calculated_grand_total'], '10300.00')
        self.assertEqual(data['gst_amount'], '300.00')
        self.assertFalse(data['has_override'])


class SolveSurchargeTest(SimpleTestCase):
    """Test cases for reconciling the MC / value added charge to a target."""

    def test_total_only(self):
        surcharge = solve_surcharge(Decimal('8000'), Decimal('10300'), SALE_GST)
        self.assertEqual(surcharge.total, Decimal('2000'))
        self.assertEqual(surcharge.weight, Decimal('0'))
        self.assertEqual(surcharge.rate, Decimal('0'))
        self.assertFalse(surcharge.clamped)

    def test_rate_solved_from_weight(self):
        surcharge = solve_surcharge(Decimal('8000'), Decimal('10300'), SALE_GST, current_weight=Decimal('4'))
        self.assertEqual(surcharge.weight, Decimal('4'))
        self.assertEqual(surcharge.rate, Decimal('500'))
        self.assertEqual(surcharge.total, Decimal('2000'))

    def test_weight_solved_from_rate(self):
        surcharge = solve_surcharge(Decimal('8000'), Decimal('10300'), SALE_GST, current_rate=Decimal('250'))
        self.assertEqual(surcharge.weight, Decimal('8'))
        self.assertEqual(surcharge.rate, Decimal('250'))

    def test_non_gst_target_is_taxable(self):
        surcharge = solve_surcharge(Decimal('8000'), Decimal('9000'), SALE_NON_GST)
        self.assertEqual(surcharge.total, Decimal('1000'))

    def test_target_below_base_clamps_to_zero(self):
        with self.assertLogs('apps.billing.calculator', level='WARNING'):
            surcharge = solve_surcharge(Decimal('8000'), Decimal('5000'), SALE_GST)
        self.assertTrue(surcharge.clamped)
        self.assertTrue(surcharge.is_zero)

    def test_surcharge_total_rounds_whole(self):
        self.assertEqual(Surcharge.from_inputs('2.5', '101').total, Decimal('253'))


class BillDraftTest(SimpleTestCase):
    """Test cases for draft value semantics."""

    def test_with_item_returns_new_draft(self):
        draft = BillDraft()
        item = LineItem('Ring', Decimal('1'), Decimal('100'))
        updated = draft.with_item(item)
        self.assertEqual(draft.items, ())
        self.assertEqual(updated.items, (item,))

    def test_without_item(self):
        a = make_line_item('A', '1', '1')
        b = make_line_item('B', '1', '2')
        draft = BillDraft().with_items([a, b])
        self.assertEqual(draft.without_item(0).items, (b,))
        self.assertEqual(draft.items, (a, b))
        with self.assertRaises(IndexError):
            draft.without_item(5)

    def test_with_items_copies_list(self):
        items = [make_line_item('A', '1', '1')]
        draft = BillDraft().with_items(items)
        items.append(make_line_item('B', '1', '1'))
        self.assertEqual(len(draft.items), 1)

    def test_unknown_sale_type(self):
        with self.assertRaises(ValidationError):
            BillDraft(sale_type='export')

    def test_blank_or_zero_target_clears_override(self):
        draft = ten_thousand_draft().with_target_payable('11000')
        self.assertTrue(draft.has_override)
        self.assertFalse(draft.with_target_payable('').has_override)
        self.assertFalse(draft.with_target_payable('0').has_override)
        self.assertFalse(draft.with_target_payable('abc').has_override)

    def test_empty_old_gold_is_dropped(self):
        draft = ten_thousand_draft().with_old_gold(make_old_gold_credit('0', '6000'))
        self.assertIsNone(draft.old_gold)

    def test_negative_discount_rejected(self):
        with self.assertRaises(ValidationError):
            ten_thousand_draft().with_discount('-1')

    def test_reconciled_matches_target(self):
        credit = make_old_gold_credit('2', '1000')
        draft = ten_thousand_draft().with_old_gold(credit).with_target_payable('10300')
        reconciled = draft.reconciled()
        self.assertEqual(reconciled.surcharge.total, Decimal('2000'))
        self.assertTrue(draft.surcharge.is_zero)

    def test_reconciled_without_override_is_unchanged(self):
        draft = ten_thousand_draft().with_surcharge_total('100')
        self.assertIs(draft.reconciled(), draft)
