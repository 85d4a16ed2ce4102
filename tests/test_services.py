"""
Test cases for saving, cancelling and returning bills.
"""
from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from apps.billing.calculator import BillDraft, make_line_item
from apps.billing.models import Bill, BillItem, SaleReturn, VALUE_ADDED_LABEL
from apps.billing.services import (
    BillHeader, BillingError, cancel_bill, compute_refund, delete_bill, load_bill_draft,
    normalize_payments, persist_bill, process_return,
)
from apps.core.models import AuditLog, User
from apps.inventory.models import Item
from apps.old_gold.ledger import make_old_gold_credit
from apps.old_gold.models import OldGoldExchange
from .factories import context_for, draft_for, make_admin, make_customer, make_item, make_user, save_bill


class PersistBillTest(TestCase):
    """Test cases for persisting a new bill."""

    def setUp(self):
        self.admin = make_admin()
        self.context = context_for(self.admin)
        self.chain = make_item()

    def test_new_gst_bill(self):
        customer = make_customer()
        bill = save_bill(self.context, draft_for(self.chain), customer_id=customer.pk)

        self.assertEqual(bill.bill_no, 'SALE-20250115-0001')
        self.assertEqual(bill.staff, self.admin)
        self.assertEqual(bill.customer, customer)
        self.assertEqual(bill.subtotal, Decimal('10000.00'))
        self.assertEqual(bill.grand_total, Decimal('10300.00'))
        self.assertEqual(bill.amount_payable, Decimal('10300.00'))
        self.assertEqual(bill.cgst, Decimal('150.00'))
        self.assertEqual(bill.sgst, Decimal('150.00'))
        self.assertEqual(bill.gst_amount, Decimal('300.00'))
        self.assertFalse(bill.has_payable_override)
        self.assertIsNone(bill.nongst_auth)

    def test_items_and_stock(self):
        bill = save_bill(self.context, draft_for(self.chain))
        row = bill.items.get()
        self.assertEqual(row.item, self.chain)
        self.assertEqual(row.line_total, Decimal('10000.00'))
        self.chain.refresh_from_db()
        self.assertEqual(self.chain.stock_status, Item.STATUS_SOLD)

    def test_draft_bill_reserves_stock(self):
        save_bill(self.context, draft_for(self.chain), bill_status=Bill.STATUS_DRAFT)
        self.chain.refresh_from_db()
        self.assertEqual(self.chain.stock_status, Item.STATUS_RESERVED)

    def test_barcode_links_stock_item(self):
        line = make_line_item('Gold Chain', '10', '1000', barcode='GC001')
        bill = save_bill(self.context, BillDraft().with_item(line))
        self.assertEqual(bill.items.get().item_id, self.chain.pk)

    def test_sequence_continues(self):
        save_bill(self.context, draft_for(self.chain))
        second = save_bill(self.context, draft_for(make_item('GR002', 'Ring', '2', '1000')))
        self.assertEqual(second.bill_no, 'SALE-20250115-0002')

    def test_non_gst_bill_records_authoriser(self):
        bill = save_bill(self.context, draft_for(self.chain, sale_type='non_gst'))
        self.assertEqual(bill.grand_total, Decimal('10000.00'))
        self.assertEqual(bill.gst_amount, Decimal('0.00'))
        self.assertEqual(bill.nongst_auth, self.admin)

    def test_target_payable_adds_value_added_line(self):
        credit = make_old_gold_credit('2', '1000', particulars='Old bangle', hsn_code='7113')
        draft = draft_for(self.chain).with_old_gold(credit).with_target_payable('10000')
        bill = save_bill(self.context, draft)

        mc = bill.value_added_item
        self.assertEqual(mc.item_name, VALUE_ADDED_LABEL)
        self.assertEqual(mc.line_total, Decimal('1709.00'))
        self.assertEqual(bill.amount_payable, Decimal('10000.00'))
        self.assertEqual(bill.grand_total, Decimal('10000.27'))
        self.assertTrue(bill.has_payable_override)
        # GST is backed out of the 10000 the customer pays
        self.assertEqual(bill.cgst, Decimal('146.00'))

        exchange = bill.old_gold_exchange
        self.assertEqual(exchange.total_value, Decimal('2000.00'))
        self.assertEqual(exchange.particulars, 'Old bangle')
        self.assertEqual(exchange.hsn_code, '7113')

    def test_payments_are_stored(self):
        payments = normalize_payments([
            {'type': 'cash', 'amount': '5000', 'reference': ''},
            {'type': 'upi', 'amount': '5300', 'reference': 'UTR123'},
        ])
        bill = save_bill(self.context, draft_for(self.chain), payments=payments)
        self.assertEqual(bill.amount_received, Decimal('10300.00'))

    def test_audit_entry(self):
        bill = save_bill(self.context, draft_for(self.chain))
        entry = AuditLog.objects.get(entity_type='bill', action='create')
        self.assertEqual(entry.entity_id, str(bill.pk))
        self.assertEqual(entry.user, self.admin)
        self.assertIn(bill.bill_no, entry.details)

    def test_empty_bill_rejected(self):
        with self.assertRaises(ValidationError):
            save_bill(self.context, BillDraft())
        self.assertFalse(Bill.objects.exists())


class PermissionTest(TestCase):
    """Test cases for who may save what."""

    def setUp(self):
        self.chain = make_item()

    def test_staff_cannot_sell_non_gst(self):
        staff = make_user('counter')
        with self.assertRaises(BillingError):
            save_bill(context_for(staff), draft_for(self.chain, sale_type='non_gst'))
        self.assertFalse(Bill.objects.exists())

    def test_authorised_staff_can_sell_non_gst(self):
        staff = make_user('senior', can_authorize_nongst=True)
        bill = save_bill(context_for(staff), draft_for(self.chain, sale_type='non_gst'))
        self.assertEqual(bill.sale_type, 'non_gst')

    def test_read_only_cannot_create(self):
        viewer = make_user('auditor', role=User.ROLE_READ_ONLY)
        with self.assertRaises(BillingError):
            save_bill(context_for(viewer), draft_for(self.chain))

    def test_staff_without_edit_flag_cannot_edit(self):
        bill = save_bill(context_for(make_admin()), draft_for(self.chain))
        staff = make_user('trainee', can_edit_bills=False)
        with self.assertRaises(BillingError):
            persist_bill(context_for(staff), BillHeader(), draft_for(self.chain), bill=bill)


class EditBillTest(TestCase):
    """Test cases for replacing a saved bill."""

    def setUp(self):
        self.context = context_for(make_admin())
        self.chain = make_item()
        self.ring = make_item('GR002', 'Ring', '2', '1000', '150')
        credit = make_old_gold_credit('1', '1000')
        self.bill = save_bill(self.context, draft_for(self.chain).with_old_gold(credit))

    def edit(self, draft, **header):
        header.setdefault('bill_date', self.bill.bill_date)
        return persist_bill(self.context, BillHeader(**header), draft, bill=self.bill)

    def test_items_are_replaced(self):
        bill = self.edit(draft_for(self.ring))
        self.assertEqual([row.item_name for row in bill.items.all()], ['Ring'])
        self.assertEqual(bill.subtotal, Decimal('2150.00'))
        self.assertEqual(bill.bill_no, 'SALE-20250115-0001')

    def test_removed_item_goes_back_to_stock(self):
        self.edit(draft_for(self.ring))
        self.chain.refresh_from_db()
        self.ring.refresh_from_db()
        self.assertEqual(self.chain.stock_status, Item.STATUS_IN_STOCK)
        self.assertEqual(self.ring.stock_status, Item.STATUS_SOLD)

    def test_clearing_old_gold_deletes_row(self):
        self.assertTrue(OldGoldExchange.objects.filter(bill=self.bill).exists())
        self.edit(draft_for(self.chain).with_old_gold(make_old_gold_credit('0', '1000')))
        self.assertFalse(OldGoldExchange.objects.filter(bill=self.bill).exists())

    def test_old_gold_is_replaced_not_added(self):
        self.edit(draft_for(self.chain).with_old_gold(make_old_gold_credit('3', '1000')))
        self.assertEqual(OldGoldExchange.objects.filter(bill=self.bill).count(), 1)
        self.assertEqual(OldGoldExchange.objects.get(bill=self.bill).total_value, Decimal('3000.00'))

    def test_dropping_target_removes_value_added_line(self):
        self.edit(draft_for(self.chain).with_target_payable('12000'))
        self.assertIsNotNone(self.bill.value_added_item)
        self.edit(draft_for(self.chain))
        self.assertIsNone(Bill.objects.get(pk=self.bill.pk).value_added_item)

    def test_cancelled_bill_cannot_be_edited(self):
        cancel_bill(self.context, self.bill)
        with self.assertRaises(BillingError):
            self.edit(draft_for(self.chain))

    def test_status_cannot_be_set_to_cancelled(self):
        with self.assertRaises(BillingError):
            self.edit(draft_for(self.chain), bill_status=Bill.STATUS_CANCELLED)


class LoadBillDraftTest(TestCase):

    def setUp(self):
        self.context = context_for(make_admin())
        self.chain = make_item()

    def test_round_trip_keeps_totals(self):
        credit = make_old_gold_credit('2', '1000', particulars='Coin', hsn_code='7108')
        draft = draft_for(self.chain).with_old_gold(credit).with_target_payable('10000')
        bill = save_bill(self.context, draft, remarks='Wedding order')

        header, loaded = load_bill_draft(bill)
        self.assertEqual(header.remarks, 'Wedding order')
        self.assertEqual(loaded.target_payable, Decimal('10000.00'))
        self.assertEqual(loaded.surcharge.total, Decimal('1709.00'))
        self.assertEqual(loaded.old_gold.particulars, 'Coin')
        self.assertEqual(len(loaded.items), 1)
        self.assertEqual(loaded.items[0].item_id, self.chain.pk)

    def test_no_override_loads_without_target(self):
        bill = save_bill(self.context, draft_for(self.chain))
        _, loaded = load_bill_draft(bill)
        self.assertIsNone(loaded.target_payable)
        self.assertIsNone(loaded.old_gold)


class CancelDeleteTest(TestCase):
    """Test cases for cancelling and deleting bills."""

    def setUp(self):
        self.admin_context = context_for(make_admin())
        self.chain = make_item()
        self.bill = save_bill(self.admin_context, draft_for(self.chain))

    def test_cancel_releases_stock(self):
        cancel_bill(self.admin_context, self.bill)
        self.bill.refresh_from_db()
        self.chain.refresh_from_db()
        self.assertTrue(self.bill.is_cancelled)
        self.assertEqual(self.chain.stock_status, Item.STATUS_IN_STOCK)

    def test_cancel_twice(self):
        cancel_bill(self.admin_context, self.bill)
        with self.assertRaises(BillingError):
            cancel_bill(self.admin_context, self.bill)

    def test_only_admin_deletes(self):
        with self.assertRaises(BillingError):
            delete_bill(context_for(make_user('counter')), self.bill)
        delete_bill(self.admin_context, self.bill)
        self.assertFalse(Bill.objects.exists())
        self.chain.refresh_from_db()
        self.assertEqual(self.chain.stock_status, Item.STATUS_IN_STOCK)


class SaleReturnTest(TestCase):
    """Test cases for returning sold items."""

    def setUp(self):
        self.context = context_for(make_admin())
        self.chain = make_item()
        self.bill = save_bill(self.context, draft_for(self.chain).with_target_payable('12000'))
        self.row = self.bill.sale_items[0]

    def test_refund_with_default_deduction(self):
        sale_return = process_return(self.context, self.row)
        self.assertEqual(sale_return.refund_amount, Decimal('9500.00'))
        self.assertEqual(sale_return.deduction_percent, Decimal('5'))
        self.chain.refresh_from_db()
        self.assertEqual(self.chain.stock_status, Item.STATUS_RETURNED)

    def test_item_returned_once(self):
        process_return(self.context, self.row, deduction_percent='0')
        with self.assertRaises(BillingError):
            process_return(self.context, BillItem.objects.get(pk=self.row.pk))
        self.assertEqual(SaleReturn.objects.count(), 1)

    def test_bill_with_return_cannot_be_edited(self):
        sale_return = process_return(self.context, self.row)
        header, draft = load_bill_draft(self.bill)
        with self.assertRaises(BillingError):
            persist_bill(self.context, header, draft, bill=self.bill)

        sale_return.refresh_from_db()
        self.chain.refresh_from_db()
        self.assertEqual(sale_return.bill_item_id, self.row.pk)
        self.assertEqual(self.chain.stock_status, Item.STATUS_RETURNED)
        with self.assertRaises(BillingError):
            process_return(self.context, BillItem.objects.get(pk=self.row.pk))
        self.assertEqual(SaleReturn.objects.count(), 1)

    def test_cancel_keeps_returned_status(self):
        process_return(self.context, self.row)
        cancel_bill(self.context, self.bill)
        self.chain.refresh_from_db()
        self.assertEqual(self.chain.stock_status, Item.STATUS_RETURNED)

    def test_value_added_line_not_returnable(self):
        with self.assertRaises(BillingError):
            process_return(self.context, self.bill.value_added_item)

    def test_deduction_out_of_range(self):
        with self.assertRaises(ValidationError):
            process_return(self.context, self.row, deduction_percent='120')

    def test_compute_refund(self):
        self.assertEqual(compute_refund('2106.79', '10'), Decimal('1896.11'))


class NormalizePaymentsTest(TestCase):

    def test_drops_blank_amounts(self):
        payments = normalize_payments([
            {'type': 'cash', 'amount': None},
            {'type': 'card', 'amount': '0'},
            {'type': 'card', 'amount': '100.5', 'reference': ' 4421 '},
        ])
        self.assertEqual(payments, ({'type': 'card', 'amount': '100.50', 'reference': '4421'},))

    def test_unknown_type(self):
        with self.assertRaises(ValidationError):
            normalize_payments([{'type': 'barter', 'amount': '10'}])

    def test_negative_amount(self):
        with self.assertRaises(ValidationError):
            normalize_payments([{'type': 'cash', 'amount': '-10'}])
