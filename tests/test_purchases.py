"""
Test cases for old gold purchase slips.
"""
from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, TestCase
from django.urls import reverse

from apps.billing.services import BillingError
from apps.core.models import AuditLog, User
from apps.purchases.models import PurchaseBill, PurchaseItem
from apps.purchases.services import item_amount, purchase_totals, record_purchase
from .factories import PASSWORD, context_for, draft_for, make_admin, make_customer, make_item, make_user, save_bill

PURCHASE_DATE = date(2025, 1, 15)


def purchase_post_data(**overrides):
    data = {
        'customer': '',
        'purchase_date': '2025-01-15',
        'sale_bill': '',
        'particulars': 'Old bangle',
        'payment_mode': 'cash',
        'payment_reference': '',
        'remarks': '',
        'items-TOTAL_FORMS': '1',
        'items-INITIAL_FORMS': '0',
        'items-MIN_NUM_FORMS': '1',
        'items-MAX_NUM_FORMS': '1000',
        'items-0-hsn_code': '7113',
        'items-0-code': 'OB1',
        'items-0-weight': '10',
        'items-0-purity': '22K',
        'items-0-rate': '6000',
    }
    data.update(overrides)
    return data


class PurchaseTotalsTest(SimpleTestCase):
    """Test cases for slip arithmetic."""

    def test_item_amount_rounds_to_paise(self):
        self.assertEqual(item_amount('3.431', '613.93'), Decimal('2106.39'))

    def test_gst_split_equally(self):
        totals = purchase_totals([Decimal('60000')])
        self.assertEqual(totals['subtotal'], Decimal('60000.00'))
        self.assertEqual(totals['cgst'], Decimal('5400.00'))
        self.assertEqual(totals['sgst'], Decimal('5400.00'))
        self.assertEqual(totals['grand_total'], Decimal('70800.00'))

    def test_each_half_rounded(self):
        totals = purchase_totals([Decimal('2106.39')])
        self.assertEqual(totals['cgst'], Decimal('189.58'))
        self.assertEqual(totals['grand_total'], Decimal('2485.55'))

    def test_custom_rate(self):
        totals = purchase_totals([Decimal('1000')], gst_rate='0.03')
        self.assertEqual(totals['cgst'], Decimal('15.00'))
        self.assertEqual(totals['grand_total'], Decimal('1030.00'))

    def test_empty_slip(self):
        self.assertEqual(purchase_totals([])['grand_total'], Decimal('0'))


class RecordPurchaseTest(TestCase):
    """Test cases for saving purchase slips."""

    def setUp(self):
        self.user = make_user('counter')
        self.context = context_for(self.user)

    def record(self, *weights, rate='6000'):
        items = [PurchaseItem(weight=Decimal(w), rate=Decimal(rate), purity='22K') for w in weights]
        return record_purchase(self.context, PurchaseBill(purchase_date=PURCHASE_DATE), items)

    def test_saves_slip_with_items(self):
        purchase = self.record('10', '2.5')
        self.assertEqual(purchase.purchase_no, 'PUR-20250115-0001')
        self.assertEqual(purchase.items.count(), 2)
        self.assertEqual(purchase.subtotal, Decimal('75000.00'))
        self.assertEqual(purchase.grand_total, Decimal('88500.00'))
        self.assertEqual(purchase.total_weight, Decimal('12.500'))
        self.assertEqual(purchase.staff, self.user)
        self.assertTrue(AuditLog.objects.filter(entity_type='purchase_bill', action='create').exists())

    def test_numbers_follow_each_other(self):
        self.record('1')
        self.assertEqual(self.record('1').purchase_no, 'PUR-20250115-0002')

    def test_sequence_separate_from_sales(self):
        save_bill(context_for(make_admin()), draft_for(make_item()))
        self.assertEqual(self.record('1').purchase_no, 'PUR-20250115-0001')

    def test_slip_needs_items(self):
        with self.assertRaises(ValidationError):
            self.record()
        self.assertFalse(PurchaseBill.objects.exists())

    def test_read_only_user_refused(self):
        self.context = context_for(make_user('viewer', role=User.ROLE_READ_ONLY))
        with self.assertRaises(BillingError):
            self.record('1')


class PurchaseViewTest(TestCase):
    """Test cases for the purchase screens."""

    def setUp(self):
        self.admin = make_admin()
        self.client.login(username='owner', password=PASSWORD)

    def test_create_purchase(self):
        customer = make_customer()
        response = self.client.post(reverse('purchases:purchase_create'),
                                    purchase_post_data(customer=str(customer.pk)))
        purchase = PurchaseBill.objects.get()
        self.assertRedirects(response, reverse('purchases:purchase_detail', args=[purchase.pk]))
        self.assertEqual(purchase.customer, customer)
        self.assertEqual(purchase.grand_total, Decimal('70800.00'))
        self.assertEqual(purchase.items.get().amount, Decimal('60000.00'))

    def test_create_needs_an_item(self):
        data = purchase_post_data(**{'items-0-weight': '', 'items-0-rate': ''})
        response = self.client.post(reverse('purchases:purchase_create'), data)
        self.assertEqual(response.status_code, 200)
        self.assertFalse(PurchaseBill.objects.exists())

    def test_create_form_prefills_from_bill(self):
        customer = make_customer()
        bill = save_bill(context_for(self.admin), draft_for(make_item()), customer_id=customer.pk)
        response = self.client.get(reverse('purchases:purchase_create'), {'bill': bill.pk})
        self.assertEqual(response.context['form'].initial['sale_bill'], bill.pk)
        self.assertEqual(response.context['form'].initial['customer'], customer.pk)

    def test_list_and_pdf(self):
        self.client.post(reverse('purchases:purchase_create'), purchase_post_data())
        purchase = PurchaseBill.objects.get()
        response = self.client.get(reverse('purchases:purchase_list'), {'purchase_no': 'PUR-2025'})
        self.assertEqual(response.context['result_count'], 1)
        self.assertEqual(response.context['totals']['grand_total'], Decimal('70800.00'))
        response = self.client.get(reverse('purchases:purchase_pdf', args=[purchase.pk]))
        self.assertEqual(response['Content-Type'], 'application/pdf')

    def test_read_only_cannot_create(self):
        make_user('viewer', role=User.ROLE_READ_ONLY)
        self.client.login(username='viewer', password=PASSWORD)
        response = self.client.get(reverse('purchases:purchase_create'))
        self.assertEqual(response.status_code, 403)

    def test_only_admin_deletes(self):
        self.client.post(reverse('purchases:purchase_create'), purchase_post_data())
        purchase = PurchaseBill.objects.get()
        make_user('counter')
        self.client.login(username='counter', password=PASSWORD)
        response = self.client.post(reverse('purchases:purchase_delete', args=[purchase.pk]))
        self.assertEqual(response.status_code, 403)
        self.client.login(username='owner', password=PASSWORD)
        response = self.client.post(reverse('purchases:purchase_delete', args=[purchase.pk]))
        self.assertRedirects(response, reverse('purchases:purchase_list'))
        self.assertFalse(PurchaseBill.objects.exists())
