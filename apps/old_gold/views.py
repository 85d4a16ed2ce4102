from django.contrib.auth.mixins import LoginRequiredMixin
from django.views.generic import ListView

from apps.billing.views import visible_bills
from apps.core.filters import contains, date_range
from apps.core.mixins import FilteredListMixin
from .forms import OldGoldFilterForm
from .models import OldGoldExchange


class OldGoldListView(LoginRequiredMixin, FilteredListMixin, ListView):
    """Register of old gold taken in exchange against bills."""
    model = OldGoldExchange
    template_name = 'old_gold/list.html'
    context_object_name = 'exchanges'
    filter_form_class = OldGoldFilterForm

    def get_rows(self):
        bills = visible_bills(self.request.session_context)
        return list(
            OldGoldExchange.objects.filter(bill__in=bills).select_related('bill', 'bill__customer')
        )

    def get_predicates(self, filters):
        return [
            date_range('bill.bill_date', filters.get('start_date'), filters.get('end_date')),
            contains(['bill.bill_no', 'bill.customer.name', 'bill.customer.phone', 'notes'],
                     filters.get('q')),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['total_weight'] = sum(e.weight for e in self.filtered_rows)
        context['total_value'] = sum(e.total_value for e in self.filtered_rows)
        return context
