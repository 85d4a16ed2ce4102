"""
Views for the core module.
"""

from django.contrib.auth.mixins import LoginRequiredMixin
from django.views.generic import ListView

from .filters import contains, date_range, exact
from .forms import AuditLogFilterForm
from .mixins import FilteredListMixin, ShopAdminRequiredMixin
from .models import AuditLog


class AuditLogListView(LoginRequiredMixin, ShopAdminRequiredMixin, FilteredListMixin, ListView):
    """Admin-only audit trail with user, action, entity and date filters."""
    model = AuditLog
    template_name = 'core/audit_log.html'
    context_object_name = 'logs'
    filter_form_class = AuditLogFilterForm

    def get_rows(self):
        return list(AuditLog.objects.select_related('user'))

    def get_predicates(self, filters):
        user = filters.get('user')
        return [
            exact('user_id', user.pk if user else None),
            contains('action', filters.get('action')),
            exact('entity_type', filters.get('entity_type')),
            date_range('created_at', filters.get('start_date'), filters.get('end_date')),
        ]
