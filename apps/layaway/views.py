"""
Views for Layaway module and the combined payment tracking screen.
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.generic import CreateView, ListView, UpdateView, View

from apps.advance_booking.views import visible_bookings
from apps.billing.views import visible_bills
from apps.core.filters import contains, date_range, exact, number_range
from apps.core.mixins import FilteredListMixin, WriteAccessRequiredMixin
from apps.core.utils import log_audit_action
from .forms import (
    LayawayBillFilterForm, LayawayTransactionFilterForm, LayawayTransactionForm, PaymentTrackingFilterForm,
)
from .models import LayawayTransaction
from .receipts import generate_layaway_statement_pdf
from .summaries import payment_feed, summarize_bill, summarize_bills

logger = logging.getLogger(__name__)


def visible_transactions(context):
    return LayawayTransaction.objects.filter(
        bill__in=visible_bills(context)
    ).select_related('bill', 'bill__customer')


class LayawayBillListView(LoginRequiredMixin, FilteredListMixin, ListView):
    """Bills being paid off, one row per bill with its running balance."""
    template_name = 'layaway/bill_list.html'
    context_object_name = 'summaries'
    filter_form_class = LayawayBillFilterForm

    def get_rows(self):
        return summarize_bills(visible_transactions(self.request.session_context))

    def get_predicates(self, filters):
        return [
            contains('bill.bill_no', filters.get('bill_no')),
            contains(['bill.customer.name', 'bill.customer.phone'], filters.get('customer')),
            date_range('bill.bill_date', filters.get('start_date'), filters.get('end_date')),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        rows = self.filtered_rows
        context['totals'] = {
            'total_amount': sum(s.total_amount for s in rows),
            'total_paid': sum(s.total_paid for s in rows),
            'remaining': sum(s.remaining for s in rows),
        }
        return context


class LayawayTransactionListView(LoginRequiredMixin, FilteredListMixin, ListView):
    template_name = 'layaway/transaction_list.html'
    context_object_name = 'transactions'
    filter_form_class = LayawayTransactionFilterForm

    def get_rows(self):
        return list(visible_transactions(self.request.session_context))

    def get_predicates(self, filters):
        return [
            exact('payment_method', filters.get('payment_method')),
            date_range('payment_date', filters.get('start_date'), filters.get('end_date')),
            number_range('amount', filters.get('min_amount'), filters.get('max_amount')),
            contains('bill.bill_no', filters.get('bill_no')),
            contains(['bill.customer.name', 'bill.customer.phone'], filters.get('customer')),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['total_amount'] = sum(t.amount for t in self.filtered_rows)
        return context


class LayawayBillDetailView(LoginRequiredMixin, View):
    def get(self, request, bill_pk):
        bill = get_object_or_404(visible_bills(request.session_context), pk=bill_pk)
        transactions = list(bill.layaway_transactions.all())
        return render(request, 'layaway/bill_detail.html', {
            'summary': summarize_bill(bill, transactions),
            'transactions': transactions,
        })


class TransactionFormMixin:
    model = LayawayTransaction
    form_class = LayawayTransactionForm
    template_name = 'layaway/transaction_form.html'

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['bills'] = visible_bills(self.request.session_context)
        return kwargs

    def get_success_url(self):
        return reverse('layaway:bill_detail', kwargs={'bill_pk': self.object.bill_id})


class LayawayTransactionCreateView(LoginRequiredMixin, WriteAccessRequiredMixin, TransactionFormMixin,
                                   CreateView):
    def get_initial(self):
        initial = super().get_initial()
        if self.request.GET.get('bill'):
            initial['bill'] = self.request.GET['bill']
        return initial

    def form_valid(self, form):
        form.instance.created_by = self.request.user
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'create', 'layaway_transaction', self.object.pk,
                         f"Layaway payment {self.object.amount} on {self.object.bill.bill_no}")
        messages.success(self.request, "Payment recorded.")
        return response


class LayawayTransactionUpdateView(LoginRequiredMixin, WriteAccessRequiredMixin, TransactionFormMixin,
                                   UpdateView):
    def get_queryset(self):
        return visible_transactions(self.request.session_context)

    def form_valid(self, form):
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'update', 'layaway_transaction', self.object.pk,
                         f"Updated layaway payment on {self.object.bill.bill_no} to {self.object.amount}")
        messages.success(self.request, "Payment updated.")
        return response


class LayawayTransactionDeleteView(LoginRequiredMixin, WriteAccessRequiredMixin, View):
    def get(self, request, pk):
        txn = get_object_or_404(visible_transactions(request.session_context), pk=pk)
        return render(request, 'layaway/transaction_confirm_delete.html', {'transaction': txn})

    def post(self, request, pk):
        txn = get_object_or_404(visible_transactions(request.session_context), pk=pk)
        bill_id, bill_no, amount = txn.bill_id, txn.bill.bill_no, txn.amount
        try:
            txn.delete()
        except DatabaseError as e:
            logger.error(f"Deleting layaway payment {pk} failed: {str(e)}")
            messages.error(request, "The payment could not be deleted.")
            return redirect('layaway:bill_detail', bill_pk=bill_id)
        log_audit_action(request.session_context, 'delete', 'layaway_transaction', pk,
                         f"Deleted layaway payment {amount} on {bill_no}")
        messages.success(request, "Payment deleted.")
        return redirect('layaway:bill_detail', bill_pk=bill_id)


class LayawayStatementPdfView(LoginRequiredMixin, View):
    def get(self, request, bill_pk):
        bill = get_object_or_404(visible_bills(request.session_context), pk=bill_pk)
        transactions = list(bill.layaway_transactions.all())
        if not transactions:
            raise Http404("No layaway payments on this bill")
        pdf_buffer = generate_layaway_statement_pdf(summarize_bill(bill, transactions), transactions)
        response = HttpResponse(pdf_buffer, content_type='application/pdf')
        response['Content-Disposition'] = f'inline; filename="layaway_{bill.bill_no}.pdf"'
        return response


class PaymentTrackingView(LoginRequiredMixin, FilteredListMixin, ListView):
    """Advance bookings and layaway payments in one feed."""
    template_name = 'layaway/payment_tracking.html'
    context_object_name = 'payments'
    filter_form_class = PaymentTrackingFilterForm

    def get_rows(self):
        context = self.request.session_context
        return payment_feed(visible_bookings(context), visible_transactions(context))

    def get_predicates(self, filters):
        return [
            exact('kind', filters.get('kind')),
            exact('status', filters.get('status')),
            date_range('payment_date', filters.get('start_date'), filters.get('end_date')),
            number_range('amount', filters.get('min_amount'), filters.get('max_amount')),
            contains('bill.bill_no', filters.get('bill_no')),
            contains(['bill.customer.name', 'bill.customer.phone'], filters.get('customer')),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['total_amount'] = sum(p.amount for p in self.filtered_rows)
        return context
