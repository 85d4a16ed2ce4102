"""
Test cases for sales bill numbering.
"""
from datetime import date
from unittest import mock

from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase

from apps.billing.models import Bill
from apps.billing.numbering import (
    assign_bill_number, fallback_bill_number, format_bill_number, next_bill_number,
)

BILL_DATE = date(2025, 1, 15)


class NextBillNumberTest(SimpleTestCase):
    """Test cases for the per-day sequence."""

    def test_increments_latest(self):
        self.assertEqual(next_bill_number(BILL_DATE, 'SALE-20250115-0007'), 'SALE-20250115-0008')

    def test_first_of_day(self):
        self.assertEqual(next_bill_number(BILL_DATE, None), 'SALE-20250115-0001')

    def test_sequence_past_four_digits(self):
        self.assertEqual(next_bill_number(BILL_DATE, 'SALE-20250115-9999'), 'SALE-20250115-10000')

    def test_unparseable_latest_raises(self):
        with self.assertRaises(ValueError):
            next_bill_number(BILL_DATE, 'SALE-20250115-ABCD')

    def test_format(self):
        self.assertEqual(format_bill_number(BILL_DATE, 42), 'SALE-20250115-0042')

    def test_fallback_uses_epoch_millis(self):
        self.assertRegex(fallback_bill_number(), r'^SALE-\d{13}$')


class AssignBillNumberTest(TestCase):
    """Test cases for numbering against saved bills."""

    def test_continues_from_saved_bills(self):
        Bill.objects.create(bill_no='SALE-20250115-0007', bill_date=BILL_DATE)
        Bill.objects.create(bill_no='SALE-20250114-0031', bill_date=date(2025, 1, 14))
        self.assertEqual(assign_bill_number(BILL_DATE), 'SALE-20250115-0008')

    def test_continues_past_four_digits(self):
        Bill.objects.create(bill_no='SALE-20250115-9999', bill_date=BILL_DATE)
        Bill.objects.create(bill_no='SALE-20250115-10000', bill_date=BILL_DATE)
        self.assertEqual(assign_bill_number(BILL_DATE), 'SALE-20250115-10001')

    def test_fresh_day(self):
        Bill.objects.create(bill_no='SALE-20250114-0031', bill_date=date(2025, 1, 14))
        self.assertEqual(assign_bill_number(BILL_DATE), 'SALE-20250115-0001')

    def test_lookup_failure_falls_back(self):
        with mock.patch('apps.billing.numbering.latest_bill_number', side_effect=DatabaseError('down')):
            with self.assertLogs('apps.billing.numbering', level='ERROR'):
                number = assign_bill_number(BILL_DATE)
        self.assertRegex(number, r'^SALE-\d{13}$')

    def test_corrupt_latest_falls_back(self):
        Bill.objects.create(bill_no='SALE-20250115-XX', bill_date=BILL_DATE)
        with self.assertLogs('apps.billing.numbering', level='ERROR'):
            number = assign_bill_number(BILL_DATE)
        self.assertRegex(number, r'^SALE-\d{13}$')
