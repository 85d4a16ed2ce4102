"""
Test cases for stock and gold rate imports.
"""
from datetime import date
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase

from apps.core.models import AuditLog
from apps.inventory.importers import GoldRateImporter, ItemImporter
from apps.inventory.models import GoldRate, Item
from .factories import context_for, make_admin, make_item


def upload(name, text):
    return SimpleUploadedFile(name, text.encode('utf-8'), content_type='text/csv')


class ItemImporterTest(TestCase):
    """Test cases for stock item import."""

    def setUp(self):
        self.context = context_for(make_admin())

    def test_creates_and_updates_by_barcode(self):
        make_item('GC001', 'Old Name', '5', '900')
        csv = (
            "Tag,Name,Wt,Karat,MC,Rate\n"
            "GC001,Gold Chain,10.250,22K,1200,6200\n"
            "GR002,Ring,3.100,22K,450,6200\n"
        )
        result = ItemImporter(upload('stock.csv', csv), self.context).process()

        self.assertTrue(result['success'])
        self.assertEqual(result['created'], 1)
        self.assertEqual(result['updated'], 1)
        chain = Item.objects.get(barcode='GC001')
        self.assertEqual(chain.item_name, 'Gold Chain')
        self.assertEqual(chain.weight, Decimal('10.250'))
        self.assertEqual(chain.making_charges, Decimal('1200'))
        self.assertEqual(chain.purity, '22K')
        self.assertTrue(AuditLog.objects.filter(action='import', entity_type='item').exists())

    def test_bad_rows_are_skipped_with_row_numbers(self):
        csv = (
            "barcode,item_name,weight\n"
            "GC001,Gold Chain,10\n"
            ",No Barcode,2\n"
            "GR003,Ring,0\n"
        )
        result = ItemImporter(upload('stock.csv', csv), self.context).process()
        self.assertEqual(result['created'], 1)
        self.assertEqual(result['skipped'], 2)
        self.assertIn('Row 3: barcode and item name are required', result['warnings'])
        self.assertIn('Row 4: weight must be a positive number', result['warnings'])

    def test_duplicate_barcodes_keep_last(self):
        csv = (
            "barcode,item_name,weight\n"
            "GC001,First,10\n"
            "GC001,Second,11\n"
        )
        result = ItemImporter(upload('stock.csv', csv), self.context).process()
        self.assertEqual(result['created'], 1)
        self.assertEqual(Item.objects.get(barcode='GC001').item_name, 'Second')
        self.assertTrue(any('duplicate' in w for w in result['warnings']))

    def test_missing_required_column(self):
        result = ItemImporter(upload('stock.csv', "barcode,item_name\nGC001,Chain\n"), self.context).process()
        self.assertFalse(result['success'])
        self.assertIn('Missing required field: weight', result['errors'])

    def test_unsupported_file_type(self):
        result = ItemImporter(upload('stock.txt', "barcode"), self.context).process()
        self.assertFalse(result['success'])
        self.assertIn('Unsupported file type: txt', result['errors'])


class GoldRateImporterTest(TestCase):

    def test_import_rates(self):
        GoldRate.objects.create(effective_date=date(2025, 1, 14), rate_per_gram=Decimal('6000'))
        csv = (
            "date,rate\n"
            "2025-01-14,6100\n"
            "2025-01-15,6150\n"
            "not a date,6200\n"
        )
        result = GoldRateImporter(upload('rates.csv', csv), context_for(make_admin())).process()
        self.assertTrue(result['success'])
        self.assertEqual(result['created'], 1)
        self.assertEqual(result['updated'], 1)
        self.assertEqual(result['skipped'], 1)
        self.assertEqual(GoldRate.objects.get(effective_date=date(2025, 1, 14)).rate_per_gram, Decimal('6100'))
