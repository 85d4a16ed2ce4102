from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from apps.billing.models import Bill, PAYMENT_TYPE_CHOICES


class LayawayTransaction(models.Model):
    """One instalment paid against an already billed sale."""
    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='layaway_transactions')
    payment_date = models.DateField(default=timezone.localdate)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_TYPE_CHOICES, default='cash')
    reference_number = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                                   blank=True, related_name='layaway_transactions')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'layaway_transactions'
        ordering = ['-payment_date', '-created_at']

    def __str__(self):
        return f"{self.bill.bill_no}: {self.amount} on {self.payment_date}"

    def clean(self):
        if self.amount is not None and self.amount <= 0:
            raise ValidationError({'amount': 'Payment amount must be greater than zero.'})
