from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from apps.billing.models import Bill


class AdvanceBooking(models.Model):
    STATUS_ACTIVE = 'active'
    STATUS_DELIVERED = 'delivered'
    STATUS_CANCELLED = 'cancelled'
    STATUS_COMPLETED = 'completed'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_DELIVERED, 'Delivered'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_COMPLETED, 'Completed'),
    ]

    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='advance_bookings')
    booking_date = models.DateField(default=timezone.localdate)
    delivery_date = models.DateField(null=True, blank=True)
    advance_amount = models.DecimalField(max_digits=14, decimal_places=2)
    total_amount = models.DecimalField(max_digits=14, decimal_places=2)
    item_description = models.TextField(blank=True)
    customer_notes = models.TextField(blank=True)
    booking_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE,
                                      db_index=True)

    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True,
                                   blank=True, related_name='advance_bookings')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'advance_bookings'
        ordering = ['-booking_date', '-created_at']

    def __str__(self):
        return f"Advance {self.advance_amount} on {self.bill.bill_no}"

    def clean(self):
        errors = {}
        if self.advance_amount is not None and self.advance_amount <= 0:
            errors['advance_amount'] = 'Advance amount must be greater than zero.'
        if (self.advance_amount is not None and self.total_amount is not None
                and self.advance_amount > self.total_amount):
            errors['advance_amount'] = 'Advance amount cannot exceed the total amount.'
        if self.delivery_date and self.booking_date and self.delivery_date < self.booking_date:
            errors['delivery_date'] = 'Delivery date cannot be before the booking date.'
        if errors:
            raise ValidationError(errors)

    @property
    def remaining_amount(self):
        return (self.total_amount or Decimal('0')) - (self.advance_amount or Decimal('0'))

    @property
    def advance_percentage(self):
        if not self.total_amount:
            return Decimal('0')
        return (self.advance_amount / self.total_amount * 100).quantize(Decimal('0.1'))

    @property
    def is_overdue(self):
        return (
            self.booking_status == self.STATUS_ACTIVE
            and self.delivery_date is not None
            and self.delivery_date < timezone.localdate()
        )
