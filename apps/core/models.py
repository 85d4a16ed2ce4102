"""
Core models for the Swarna application.
Contains the shop user (with role and permission flags) and the audit trail.
"""

from django.db import models
from django.contrib.auth.models import AbstractUser, UserManager as BaseUserManager
from django.utils.translation import gettext_lazy as _


class UserManager(BaseUserManager):
    """User manager that gives superusers the shop admin role."""

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        extra_fields.setdefault('can_edit_bills', True)
        extra_fields.setdefault('can_edit_stock', True)
        extra_fields.setdefault('can_authorize_nongst', True)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Shop user.
    Role decides which screens are visible; the three flags fine-tune what
    a staff member may change.
    """
    ROLE_ADMIN = 'admin'
    ROLE_STAFF = 'staff'
    ROLE_READ_ONLY = 'read_only'

    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_STAFF, 'Staff'),
        (ROLE_READ_ONLY, 'Read Only'),
    ]

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_STAFF)
    staff_code = models.CharField(max_length=20, blank=True)
    phone = models.CharField(max_length=20, blank=True)

    can_edit_bills = models.BooleanField(default=True)
    can_edit_stock = models.BooleanField(default=False)
    can_authorize_nongst = models.BooleanField(
        default=False, help_text="May create Non-GST sales"
    )

    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    class Meta:
        db_table = 'users'
        ordering = ['username']

    def __str__(self):
        if self.staff_code:
            return f"{self.username} ({self.staff_code})"
        return self.username

    @property
    def is_shop_admin(self):
        return self.role == self.ROLE_ADMIN or self.is_superuser

    @property
    def is_read_only(self):
        return self.role == self.ROLE_READ_ONLY and not self.is_superuser


class AuditLog(models.Model):
    """
    Audit trail for every create/update/delete made from the shop screens.
    """
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True,
                             related_name='audit_logs')
    action = models.CharField(max_length=50, db_index=True,
                              help_text="e.g., create, update, delete, login")
    entity_type = models.CharField(max_length=50, blank=True,
                                   help_text="e.g., bill, customer, item")
    entity_id = models.CharField(max_length=50, blank=True)
    details = models.TextField(blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'audit_log'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='audit_log_user_id_5d1c3e_idx'),
            models.Index(fields=['entity_type', '-created_at'], name='audit_log_entity__8a2f41_idx'),
        ]

    def __str__(self):
        user_str = self.user.username if self.user else _("System")
        return f"{user_str} - {self.action} - {self.created_at}"
