"""
Test cases for Swarna models.
"""
from datetime import date, timedelta
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone

from apps.advance_booking.models import AdvanceBooking
from apps.billing.models import Bill
from apps.core.context import SessionContext
from apps.core.models import AuditLog, User
from apps.core.utils import log_audit_action
from apps.inventory.models import GoldRate
from .factories import context_for, make_customer, make_user


class UserModelTest(TestCase):
    """Test cases for User model."""

    def test_user_creation(self):
        user = make_user('counter')
        self.assertEqual(user.role, User.ROLE_STAFF)
        self.assertFalse(user.is_shop_admin)
        self.assertFalse(user.is_read_only)

    def test_user_str(self):
        user = make_user('counter', staff_code='S01')
        self.assertEqual(str(user), 'counter (S01)')

    def test_superuser_is_shop_admin(self):
        user = User.objects.create_superuser('owner', 'owner@example.com', 'pass')
        self.assertEqual(user.role, User.ROLE_ADMIN)
        self.assertTrue(user.can_authorize_nongst)
        self.assertTrue(user.is_shop_admin)


class SessionContextTest(TestCase):
    """Test cases for the request-scoped session context."""

    def test_staff_context(self):
        context = context_for(make_user('counter'))
        self.assertTrue(context.may_create_bills)
        self.assertFalse(context.may_sell_non_gst)
        self.assertFalse(context.may_edit_stock)

    def test_admin_gets_every_permission(self):
        context = context_for(make_user('owner', role=User.ROLE_ADMIN, can_edit_bills=False))
        self.assertTrue(context.is_admin)
        self.assertTrue(context.can_edit_bills)
        self.assertTrue(context.may_sell_non_gst)
        self.assertTrue(context.may_edit_stock)

    def test_read_only(self):
        context = context_for(make_user('auditor', role=User.ROLE_READ_ONLY, can_edit_stock=True))
        self.assertFalse(context.may_create_bills)
        self.assertFalse(context.may_edit_stock)

    def test_anonymous(self):
        context = SessionContext.from_user(None)
        self.assertFalse(context.is_authenticated)
        self.assertFalse(context.may_create_bills)


class AuditLogTest(TestCase):

    def test_log_audit_action(self):
        user = make_user('counter')
        entry = log_audit_action(context_for(user), 'update', 'customer', 7, 'Changed phone')
        self.assertEqual(entry.user, user)
        self.assertEqual(entry.entity_id, '7')
        self.assertEqual(entry.ip_address, '127.0.0.1')
        self.assertIn('counter', str(entry))

    def test_anonymous_entry(self):
        entry = log_audit_action(SessionContext(), 'login_failed', 'user')
        self.assertIsNone(entry.user)
        self.assertEqual(AuditLog.objects.count(), 1)


class CustomerModelTest(TestCase):

    def test_code_assigned_from_pk(self):
        customer = make_customer()
        self.assertEqual(customer.customer_code, f"CUST-{customer.pk:05d}")

    def test_code_kept_on_resave(self):
        customer = make_customer()
        code = customer.customer_code
        customer.name = 'Lakshmi N'
        customer.save()
        customer.refresh_from_db()
        self.assertEqual(customer.customer_code, code)


class GoldRateTest(TestCase):
    """Test cases for the day's gold rate."""

    def test_no_rate(self):
        self.assertIsNone(GoldRate.objects.current_rate())

    def test_latest_effective_rate(self):
        today = timezone.localdate()
        GoldRate.objects.create(effective_date=today - timedelta(days=2), rate_per_gram=Decimal('6100'))
        GoldRate.objects.create(effective_date=today - timedelta(days=1), rate_per_gram=Decimal('6150'))
        GoldRate.objects.create(effective_date=today + timedelta(days=1), rate_per_gram=Decimal('9999'))
        self.assertEqual(GoldRate.objects.current_rate(), Decimal('6150'))


class AdvanceBookingModelTest(TestCase):
    """Test cases for advance booking validation."""

    def setUp(self):
        self.bill = Bill.objects.create(bill_no='SALE-20250115-0001', bill_date=date(2025, 1, 15),
                                        grand_total=Decimal('50000'), amount_payable=Decimal('50000'))

    def booking(self, **kwargs):
        values = {
            'bill': self.bill,
            'booking_date': date(2025, 1, 15),
            'advance_amount': Decimal('10000'),
            'total_amount': Decimal('50000'),
        }
        values.update(kwargs)
        return AdvanceBooking(**values)

    def test_valid_booking(self):
        booking = self.booking(delivery_date=date(2025, 2, 1))
        booking.full_clean()
        self.assertEqual(booking.remaining_amount, Decimal('40000'))
        self.assertEqual(booking.advance_percentage, Decimal('20.0'))

    def test_advance_must_be_positive(self):
        with self.assertRaises(ValidationError) as ctx:
            self.booking(advance_amount=Decimal('0')).full_clean()
        self.assertIn('advance_amount', ctx.exception.message_dict)

    def test_advance_cannot_exceed_total(self):
        with self.assertRaises(ValidationError):
            self.booking(advance_amount=Decimal('60000')).full_clean()

    def test_delivery_before_booking(self):
        with self.assertRaises(ValidationError) as ctx:
            self.booking(delivery_date=date(2025, 1, 10)).full_clean()
        self.assertIn('delivery_date', ctx.exception.message_dict)

    def test_overdue(self):
        booking = self.booking(delivery_date=timezone.localdate() - timedelta(days=1))
        self.assertTrue(booking.is_overdue)
        booking.booking_status = AdvanceBooking.STATUS_DELIVERED
        self.assertFalse(booking.is_overdue)
