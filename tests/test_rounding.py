"""
Test cases for bill rounding rules.
"""
from decimal import Decimal

from django.test import SimpleTestCase

from apps.billing.rounding import (
    quantize_money, round_currency, round_gst_whole, round_whole, to_decimal,
)


class RoundCurrencyTest(SimpleTestCase):
    """Test cases for rounding to paise."""

    def test_half_paisa_rounds_up(self):
        self.assertEqual(round_currency('2106.795'), Decimal('2106.80'))

    def test_below_half_paisa_rounds_down(self):
        self.assertEqual(round_currency('2106.794'), Decimal('2106.79'))

    def test_float_input_reads_as_written(self):
        """2106.795 is not exactly representable as a float."""
        self.assertEqual(round_currency(2106.795), Decimal('2106.80'))

    def test_negative_is_zero(self):
        self.assertEqual(round_currency(-5), Decimal('0'))

    def test_non_finite_is_zero(self):
        self.assertEqual(round_currency(Decimal('NaN')), Decimal('0'))
        self.assertEqual(round_currency(float('inf')), Decimal('0'))


class RoundGstWholeTest(SimpleTestCase):
    """Test cases for whole-rupee GST rounding."""

    def test_half_rounds_up(self):
        self.assertEqual(round_gst_whole('393.5'), Decimal('394'))

    def test_below_half_rounds_down(self):
        self.assertEqual(round_gst_whole('393.2'), Decimal('393'))

    def test_zero_and_negative(self):
        self.assertEqual(round_gst_whole(0), Decimal('0'))
        self.assertEqual(round_gst_whole(-12), Decimal('0'))


class RoundWholeTest(SimpleTestCase):
    """Test cases for the MC / value added rounding."""

    def test_half_rounds_up(self):
        self.assertEqual(round_whole('2106.5'), Decimal('2107'))

    def test_below_half_rounds_down(self):
        self.assertEqual(round_whole('2106.4'), Decimal('2106'))

    def test_zero_is_kept(self):
        self.assertEqual(round_whole(0), Decimal('0'))

    def test_negative_is_zero(self):
        self.assertEqual(round_whole('-0.4'), Decimal('0'))


class ToDecimalTest(SimpleTestCase):

    def test_blank_and_junk_use_default(self):
        self.assertEqual(to_decimal(''), Decimal('0'))
        self.assertIsNone(to_decimal('abc', None))
        self.assertIsNone(to_decimal(None, None))

    def test_strips_whitespace(self):
        self.assertEqual(to_decimal(' 12.50 '), Decimal('12.50'))

    def test_quantize_money_keeps_sign(self):
        self.assertEqual(quantize_money('-3.005'), Decimal('-3.01'))
