"""
Test cases for in-memory list filtering and pagination.
"""
from datetime import date, timedelta
from decimal import Decimal

from django.test import SimpleTestCase

from apps.core.filters import (
    ALL, apply_filters, contains, date_range, exact, number_range, paginate, resolve,
)


def sample_rows():
    start = date(2025, 1, 1)
    return [
        {
            'bill_no': f"SALE-202501{(i % 28) + 1:02d}-{i:04d}",
            'bill_date': start + timedelta(days=i % 28),
            'grand_total': Decimal(1000 * i),
            'sale_type': 'gst' if i % 2 else 'non_gst',
            'customer': {'name': 'Lakshmi' if i % 3 == 0 else 'Ravi', 'phone': f"98450{i:05d}"},
        }
        for i in range(1, 46)
    ]


class PredicateTest(SimpleTestCase):
    """Test cases for the predicate builders."""

    def setUp(self):
        self.rows = sample_rows()

    def test_blank_input_disables_predicate(self):
        self.assertIsNone(date_range('bill_date', '', None))
        self.assertIsNone(number_range('grand_total', None, ''))
        self.assertIsNone(contains('bill_no', '  '))
        self.assertIsNone(exact('sale_type', ALL))
        self.assertIsNone(exact('sale_type', ''))

    def test_date_range_is_inclusive(self):
        rows = apply_filters(self.rows, [date_range('bill_date', '2025-01-02', '2025-01-03')])
        self.assertTrue(rows)
        self.assertTrue(all(date(2025, 1, 2) <= r['bill_date'] <= date(2025, 1, 3) for r in rows))
        self.assertIn(date(2025, 1, 3), [r['bill_date'] for r in rows])

    def test_number_range(self):
        rows = apply_filters(self.rows, [number_range('grand_total', '5000', '7000')])
        self.assertEqual([r['grand_total'] for r in rows], [Decimal(5000), Decimal(6000), Decimal(7000)])

    def test_unparseable_number_is_ignored(self):
        self.assertIsNone(number_range('grand_total', 'abc', None))

    def test_contains_is_case_insensitive_across_fields(self):
        by_name = apply_filters(self.rows, [contains(['customer.name', 'customer.phone'], 'lakSHMI')])
        self.assertEqual(len(by_name), 15)
        by_phone = apply_filters(self.rows, [contains(['customer.name', 'customer.phone'], '9845000045')])
        self.assertEqual(len(by_phone), 1)

    def test_exact(self):
        rows = apply_filters(self.rows, [exact('sale_type', 'non_gst')])
        self.assertEqual(len(rows), 22)

    def test_predicates_combine_conjunctively(self):
        rows = apply_filters(self.rows, [
            exact('sale_type', 'gst'),
            contains('customer.name', 'ravi'),
        ])
        self.assertTrue(all(r['sale_type'] == 'gst' and r['customer']['name'] == 'Ravi' for r in rows))

    def test_resolve_handles_missing_links(self):
        self.assertIsNone(resolve({'customer': None}, 'customer.name'))


class ApplyFiltersTest(SimpleTestCase):

    def test_idempotent_and_source_untouched(self):
        rows = sample_rows()
        snapshot = list(rows)
        predicates = [exact('sale_type', 'gst'), number_range('grand_total', '10000', None)]
        first = apply_filters(rows, predicates)
        second = apply_filters(rows, predicates)
        self.assertEqual(first, second)
        self.assertEqual(rows, snapshot)
        self.assertIsNot(first, rows)

    def test_no_predicates_returns_everything(self):
        rows = sample_rows()
        self.assertEqual(apply_filters(rows, [None, None]), rows)


class PaginateTest(SimpleTestCase):
    """Test cases for 20-per-page pagination."""

    def setUp(self):
        self.rows = list(range(1, 46))

    def test_page_count(self):
        self.assertEqual(paginate(self.rows, 1).paginator.num_pages, 3)

    def test_first_page(self):
        self.assertEqual(list(paginate(self.rows, 1)), list(range(1, 21)))

    def test_last_page(self):
        self.assertEqual(list(paginate(self.rows, 3)), list(range(41, 46)))

    def test_out_of_range_clamps_to_last_page(self):
        self.assertEqual(paginate(self.rows, 9).number, 3)

    def test_empty_list_has_one_page(self):
        page = paginate([], 1)
        self.assertEqual(page.paginator.num_pages, 1)
        self.assertEqual(list(page), [])
