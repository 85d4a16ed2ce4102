from django.db import models

from apps.billing.models import Bill
from .ledger import decode_notes


class OldGoldExchange(models.Model):
    """Old gold credited against a bill. At most one per bill."""
    bill = models.OneToOneField(Bill, on_delete=models.CASCADE, related_name='old_gold_exchange')
    weight = models.DecimalField(max_digits=10, decimal_places=3)
    purity = models.CharField(max_length=20, blank=True)
    rate_per_gram = models.DecimalField(max_digits=10, decimal_places=2)
    total_value = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(blank=True, help_text="Description: X | HSN Code: Y")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'old_gold_exchanges'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.bill.bill_no} - {self.weight}g"

    @property
    def particulars(self):
        return decode_notes(self.notes)[0]

    @property
    def hsn_code(self):
        return decode_notes(self.notes)[1]
