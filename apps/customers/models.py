from django.db import models


class Customer(models.Model):
    customer_code = models.CharField(max_length=20, unique=True, blank=True, null=True)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=15, db_index=True)
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.phone})"

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        # Code is derived from the primary key, so it is only known after the insert
        if not self.customer_code:
            self.customer_code = f"CUST-{self.pk:05d}"
            super().save(update_fields=['customer_code'])
