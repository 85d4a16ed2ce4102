"""
Django admin configuration for Core models.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from .models import User, AuditLog


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'staff_code', 'role', 'can_edit_bills', 'can_edit_stock',
                    'can_authorize_nongst', 'is_active')
    list_filter = ('role', 'is_active', 'can_edit_bills', 'can_edit_stock', 'can_authorize_nongst')
    search_fields = ('username', 'staff_code', 'email', 'phone')
    ordering = ('username',)

    fieldsets = BaseUserAdmin.fieldsets + (
        (_('Shop access'), {
            'fields': ('role', 'staff_code', 'phone', 'can_edit_bills', 'can_edit_stock',
                       'can_authorize_nongst'),
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        (_('Shop access'), {
            'fields': ('role', 'staff_code', 'can_edit_bills', 'can_edit_stock',
                       'can_authorize_nongst'),
        }),
    )


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'action', 'entity_type', 'entity_id')
    list_filter = ('action', 'entity_type', 'created_at')
    search_fields = ('details', 'user__username', 'ip_address')
    ordering = ('-created_at',)
    readonly_fields = ('created_at', 'ip_address', 'user_agent')
    raw_id_fields = ('user',)

    def has_add_permission(self, request):
        # Audit logs should not be manually created
        return False

    def has_change_permission(self, request, obj=None):
        # Audit logs should not be modified
        return False
