from django.db import models
from django.utils import timezone


class Item(models.Model):
    STATUS_IN_STOCK = 'in_stock'
    STATUS_RESERVED = 'reserved'
    STATUS_SOLD = 'sold'
    STATUS_RETURNED = 'returned'

    STATUS_CHOICES = [
        (STATUS_IN_STOCK, 'In Stock'),
        (STATUS_RESERVED, 'Reserved'),
        (STATUS_SOLD, 'Sold'),
        (STATUS_RETURNED, 'Returned'),
    ]

    barcode = models.CharField(max_length=50, unique=True)
    item_name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, blank=True)
    weight = models.DecimalField(max_digits=10, decimal_places=3, help_text="Grams")
    purity = models.CharField(max_length=20, blank=True, help_text="e.g., 22K, 916")
    making_charges = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    stone_type = models.CharField(max_length=100, blank=True)
    hsn_code = models.CharField(max_length=20, blank=True)
    gst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    price_per_gram = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    net_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    stock_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_IN_STOCK,
                                    db_index=True)
    location = models.CharField(max_length=100, blank=True)
    remarks = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'items'
        ordering = ['item_name']

    def __str__(self):
        return f"{self.barcode} - {self.item_name}"

    @property
    def is_available(self):
        return self.stock_status == self.STATUS_IN_STOCK


class GoldRateManager(models.Manager):
    def current(self):
        """Latest rate by effective date, or None when no rate was ever set."""
        return self.filter(effective_date__lte=timezone.localdate()).order_by('-effective_date').first()

    def current_rate(self):
        rate = self.current()
        return rate.rate_per_gram if rate else None


class GoldRate(models.Model):
    rate_per_gram = models.DecimalField(max_digits=10, decimal_places=2)
    effective_date = models.DateField(unique=True, default=timezone.localdate)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = GoldRateManager()

    class Meta:
        db_table = 'gold_rates'
        ordering = ['-effective_date']

    def __str__(self):
        return f"{self.effective_date}: {self.rate_per_gram}/g"
