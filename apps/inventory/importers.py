"""
Bulk import of stock and gold rates.
Supports CSV, Excel (.xlsx) and JSON files with alias-based column mapping.
"""

from abc import ABC, abstractmethod
import logging
from decimal import Decimal, InvalidOperation

import pandas as pd
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from apps.core.utils import log_audit_action
from .models import GoldRate, Item

logger = logging.getLogger(__name__)


class BaseImporter(ABC):
    """Abstract base class for all importers"""

    REQUIRED_FIELDS = []
    FIELD_ALIASES = {}

    def __init__(self, file, context):
        self.file = file
        self.context = context
        self.errors = []
        self.warnings = []

    @abstractmethod
    def transform_data(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean and transform data"""

    @abstractmethod
    def import_records(self, df: pd.DataFrame) -> dict:
        """Save to database"""

    def process(self) -> dict:
        """Main import pipeline"""
        try:
            df = self.read_file()

            if not self.validate_schema(df):
                return {'success': False, 'errors': self.errors}

            df = self.transform_data(df)
            result = self.import_records(df)
        except (ValidationError, ValueError, DatabaseError) as e:
            logger.error(f"{self.__class__.__name__} failed: {str(e)}")
            messages = e.messages if isinstance(e, ValidationError) else [str(e)]
            return {'success': False, 'errors': messages}

        log_audit_action(
            self.context, 'import', self.entity_type, None,
            f"Imported {self.file.name}: {result['created']} created, "
            f"{result['updated']} updated, {result['skipped']} skipped"
        )
        return {
            'success': True,
            'created': result['created'],
            'updated': result['updated'],
            'skipped': result['skipped'],
            'warnings': self.warnings,
        }

    def read_file(self) -> pd.DataFrame:
        """Read the upload according to its extension"""
        ext = self.file.name.split('.')[-1].lower()

        if ext == 'csv':
            return pd.read_csv(self.file, dtype=str)
        elif ext in ['xlsx', 'xls']:
            return pd.read_excel(self.file, dtype=str)
        elif ext == 'json':
            return pd.read_json(self.file, dtype=False)
        else:
            raise ValidationError(f"Unsupported file type: {ext}")

    def validate_schema(self, df: pd.DataFrame) -> bool:
        """Every required field must be present under its name or an alias"""
        df_columns_lower = [str(c).lower().strip() for c in df.columns]

        for required in self.REQUIRED_FIELDS:
            aliases = [required] + self.FIELD_ALIASES.get(required, [])
            if not any(alias.lower() in df_columns_lower for alias in aliases):
                self.errors.append(f"Missing required field: {required}")

        return len(self.errors) == 0

    def _normalize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        """Map various column names to standard fields"""
        rename_map = {}

        for col in df.columns:
            col_lower = str(col).lower().strip()
            for standard_field, aliases in self.FIELD_ALIASES.items():
                if col_lower in [standard_field] + [a.lower() for a in aliases]:
                    rename_map[col] = standard_field
                    break

        return df.rename(columns=rename_map)

    @staticmethod
    def _decimal(value, default=None):
        if value is None or pd.isna(value) or str(value).strip() == '':
            return default
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            return default

    @staticmethod
    def _text(value):
        if value is None or pd.isna(value):
            return ''
        return str(value).strip()


class ItemImporter(BaseImporter):
    """Stock items keyed by barcode; existing barcodes are updated."""

    entity_type = 'item'
    REQUIRED_FIELDS = ['barcode', 'item_name', 'weight']

    FIELD_ALIASES = {
        'barcode': ['tag', 'tag_no', 'sku', 'code', 'item_code'],
        'item_name': ['name', 'item', 'product', 'product_name', 'description'],
        'category': ['type', 'item_type'],
        'weight': ['gross_weight', 'net_weight', 'wt', 'weight_g'],
        'purity': ['karat', 'carat', 'touch'],
        'making_charges': ['mc', 'making', 'making_charge'],
        'stone_type': ['stone', 'stones'],
        'hsn_code': ['hsn'],
        'gst_rate': ['gst', 'tax_rate'],
        'price_per_gram': ['rate', 'rate_per_gram'],
        'net_price': ['price', 'mrp', 'amount'],
        'location': ['counter', 'tray'],
        'remarks': ['notes', 'comment'],
    }

    DECIMAL_FIELDS = ['making_charges', 'gst_rate', 'price_per_gram', 'net_price']
    TEXT_FIELDS = ['category', 'purity', 'stone_type', 'hsn_code', 'location', 'remarks']

    def transform_data(self, df: pd.DataFrame) -> pd.DataFrame:
        df = self._normalize_columns(df)

        df['barcode'] = df['barcode'].map(self._text)
        df['item_name'] = df['item_name'].map(self._text)

        duplicated = df['barcode'].ne('') & df.duplicated(subset=['barcode'], keep='last')
        if duplicated.any():
            self.warnings.append(
                f"{int(duplicated.sum())} duplicate barcodes in file; the last row for each is used"
            )
            df = df[~duplicated]

        return df

    def import_records(self, df: pd.DataFrame) -> dict:
        created = updated = skipped = 0

        with transaction.atomic():
            for idx, row in df.iterrows():
                row_no = idx + 2  # header is row 1
                weight = self._decimal(row.get('weight'))
                if not row['barcode'] or not row['item_name']:
                    self.warnings.append(f"Row {row_no}: barcode and item name are required")
                    skipped += 1
                    continue
                if weight is None or weight <= 0:
                    self.warnings.append(f"Row {row_no}: weight must be a positive number")
                    skipped += 1
                    continue

                defaults = {'item_name': row['item_name'], 'weight': weight}
                for field in self.DECIMAL_FIELDS:
                    if field in row:
                        defaults[field] = self._decimal(row.get(field), Decimal('0'))
                for field in self.TEXT_FIELDS:
                    if field in row:
                        defaults[field] = self._text(row.get(field))

                _, was_created = Item.objects.update_or_create(barcode=row['barcode'], defaults=defaults)
                if was_created:
                    created += 1
                else:
                    updated += 1

        return {'created': created, 'updated': updated, 'skipped': skipped}


class GoldRateImporter(BaseImporter):
    """Historical gold rates, one per effective date."""

    entity_type = 'gold_rate'
    REQUIRED_FIELDS = ['effective_date', 'rate_per_gram']

    FIELD_ALIASES = {
        'effective_date': ['date', 'rate_date'],
        'rate_per_gram': ['rate', 'gold_rate', 'price'],
    }

    def transform_data(self, df: pd.DataFrame) -> pd.DataFrame:
        df = self._normalize_columns(df)
        df['effective_date'] = pd.to_datetime(df['effective_date'], errors='coerce', dayfirst=False)

        invalid_count = int(df['effective_date'].isna().sum())
        if invalid_count > 0:
            self.warnings.append(f"{invalid_count} rows with invalid dates will be skipped")
        return df

    def import_records(self, df: pd.DataFrame) -> dict:
        created = updated = skipped = 0

        with transaction.atomic():
            for idx, row in df.iterrows():
                rate = self._decimal(row.get('rate_per_gram'))
                if pd.isna(row['effective_date']):
                    skipped += 1
                    continue
                if rate is None or rate <= 0:
                    self.warnings.append(f"Row {idx + 2}: rate must be a positive number")
                    skipped += 1
                    continue

                _, was_created = GoldRate.objects.update_or_create(
                    effective_date=row['effective_date'].date(),
                    defaults={'rate_per_gram': rate},
                )
                if was_created:
                    created += 1
                else:
                    updated += 1

        return {'created': created, 'updated': updated, 'skipped': skipped}
