"""
Views for Customers module.
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse_lazy
from django.views.generic import CreateView, DetailView, ListView, UpdateView, View

from apps.core.filters import contains
from apps.core.mixins import FilteredListMixin, WriteAccessRequiredMixin
from apps.core.utils import log_audit_action
from .forms import CustomerFilterForm, CustomerForm
from .models import Customer

logger = logging.getLogger(__name__)

TRANSACTION_STATUS = {
    'finalized': 'completed',
    'cancelled': 'cancelled',
}


def transaction_status(bill_status):
    return TRANSACTION_STATUS.get(bill_status, 'pending')


class CustomerListView(LoginRequiredMixin, FilteredListMixin, ListView):
    model = Customer
    template_name = 'customers/customer_list.html'
    context_object_name = 'customers'
    filter_form_class = CustomerFilterForm

    def get_predicates(self, filters):
        return [contains(['name', 'phone', 'customer_code', 'email'], filters.get('q'))]


class CustomerCreateView(LoginRequiredMixin, WriteAccessRequiredMixin, CreateView):
    model = Customer
    form_class = CustomerForm
    template_name = 'customers/customer_form.html'

    def form_valid(self, form):
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'create', 'customer', self.object.pk,
                         f"Created customer {self.object.customer_code}")
        messages.success(self.request, f"Customer {self.object.name} added.")
        return response

    def get_success_url(self):
        return reverse_lazy('customers:customer_detail', kwargs={'pk': self.object.pk})


class CustomerUpdateView(LoginRequiredMixin, WriteAccessRequiredMixin, UpdateView):
    model = Customer
    form_class = CustomerForm
    template_name = 'customers/customer_form.html'

    def form_valid(self, form):
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'update', 'customer', self.object.pk,
                         f"Updated customer {self.object.customer_code}")
        messages.success(self.request, "Customer updated.")
        return response

    def get_success_url(self):
        return reverse_lazy('customers:customer_detail', kwargs={'pk': self.object.pk})


class CustomerDetailView(LoginRequiredMixin, DetailView):
    """Customer profile with their bill history."""
    model = Customer
    template_name = 'customers/customer_detail.html'
    context_object_name = 'customer'

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        bills = self.object.bills.all()
        if not self.request.session_context.may_sell_non_gst:
            bills = bills.filter(sale_type='gst')
        context['transactions'] = [
            {'bill': bill, 'status': transaction_status(bill.bill_status)}
            for bill in bills
        ]
        context['total_purchases'] = sum(
            bill.amount_payable for bill in bills if bill.bill_status == 'finalized'
        )
        return context


class CustomerDeleteView(LoginRequiredMixin, WriteAccessRequiredMixin, View):
    def get(self, request, pk):
        customer = get_object_or_404(Customer, pk=pk)
        return render(request, 'customers/customer_confirm_delete.html', {'customer': customer})

    def post(self, request, pk):
        customer = get_object_or_404(Customer, pk=pk)
        name, code = customer.name, customer.customer_code
        try:
            customer.delete()
        except DatabaseError as e:
            logger.error(f"Deleting customer {code} failed: {str(e)}")
            messages.error(request, "The customer could not be deleted.")
            return redirect('customers:customer_detail', pk=pk)
        log_audit_action(request.session_context, 'delete', 'customer', pk, f"Deleted customer {code}")
        messages.success(request, f"Customer {name} deleted.")
        return redirect('customers:customer_list')


class CustomerSearchView(LoginRequiredMixin, View):
    """Phone lookup used by the billing screen; a miss is an empty list."""

    def get(self, request):
        phone = request.GET.get('phone', '').strip()
        if len(phone) < 3:
            return JsonResponse({'results': []})
        customers = Customer.objects.filter(phone__icontains=phone).order_by('name')[:10]
        return JsonResponse({'results': [
            {'id': c.pk, 'code': c.customer_code, 'name': c.name, 'phone': c.phone}
            for c in customers
        ]})
