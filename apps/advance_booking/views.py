"""
Views for Advance Bookings module.
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse_lazy
from django.views.generic import CreateView, ListView, UpdateView, View

from apps.billing.views import visible_bills
from apps.core.filters import contains, date_range, exact, number_range
from apps.core.mixins import FilteredListMixin, WriteAccessRequiredMixin
from apps.core.utils import log_audit_action
from .forms import AdvanceBookingFilterForm, AdvanceBookingForm
from .models import AdvanceBooking
from .receipts import generate_advance_receipt_pdf

logger = logging.getLogger(__name__)


def visible_bookings(context):
    return AdvanceBooking.objects.filter(
        bill__in=visible_bills(context)
    ).select_related('bill', 'bill__customer')


class AdvanceBookingListView(LoginRequiredMixin, FilteredListMixin, ListView):
    model = AdvanceBooking
    template_name = 'advance_booking/booking_list.html'
    context_object_name = 'bookings'
    filter_form_class = AdvanceBookingFilterForm

    def get_rows(self):
        return list(visible_bookings(self.request.session_context))

    def get_predicates(self, filters):
        return [
            exact('booking_status', filters.get('booking_status')),
            date_range('booking_date', filters.get('start_date'), filters.get('end_date')),
            number_range('advance_amount', filters.get('min_amount'), filters.get('max_amount')),
            contains('bill.bill_no', filters.get('bill_no')),
            contains(['bill.customer.name', 'bill.customer.phone'], filters.get('customer')),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        rows = self.filtered_rows
        context['summary'] = {
            'total_advance': sum(b.advance_amount for b in rows),
            'total_value': sum(b.total_amount for b in rows),
            'total_remaining': sum(b.remaining_amount for b in rows),
            'active_count': sum(1 for b in rows if b.booking_status == AdvanceBooking.STATUS_ACTIVE),
            'overdue_count': sum(1 for b in rows if b.is_overdue),
        }
        return context


class BookingFormMixin:
    model = AdvanceBooking
    form_class = AdvanceBookingForm
    template_name = 'advance_booking/booking_form.html'
    success_url = reverse_lazy('advance_booking:booking_list')

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['bills'] = visible_bills(self.request.session_context)
        return kwargs


class AdvanceBookingCreateView(LoginRequiredMixin, WriteAccessRequiredMixin, BookingFormMixin, CreateView):
    def get_initial(self):
        initial = super().get_initial()
        bill_id = self.request.GET.get('bill')
        if bill_id:
            bill = visible_bills(self.request.session_context).filter(pk=bill_id).first()
            if bill is not None:
                initial['bill'] = bill.pk
                initial['total_amount'] = bill.amount_payable
        return initial

    def form_valid(self, form):
        form.instance.created_by = self.request.user
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'create', 'advance_booking', self.object.pk,
                         f"Advance {self.object.advance_amount} on {self.object.bill.bill_no}")
        messages.success(self.request, "Advance booking recorded.")
        return response


class AdvanceBookingUpdateView(LoginRequiredMixin, WriteAccessRequiredMixin, BookingFormMixin, UpdateView):
    def get_queryset(self):
        return visible_bookings(self.request.session_context)

    def form_valid(self, form):
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'update', 'advance_booking', self.object.pk,
                         f"Updated advance booking on {self.object.bill.bill_no} "
                         f"({self.object.booking_status})")
        messages.success(self.request, "Advance booking updated.")
        return response


class AdvanceBookingDeleteView(LoginRequiredMixin, WriteAccessRequiredMixin, View):
    def get(self, request, pk):
        booking = get_object_or_404(visible_bookings(request.session_context), pk=pk)
        return render(request, 'advance_booking/booking_confirm_delete.html', {'booking': booking})

    def post(self, request, pk):
        booking = get_object_or_404(visible_bookings(request.session_context), pk=pk)
        bill_no = booking.bill.bill_no
        try:
            booking.delete()
        except DatabaseError as e:
            logger.error(f"Deleting advance booking {pk} failed: {str(e)}")
            messages.error(request, "The booking could not be deleted.")
            return redirect('advance_booking:booking_list')
        log_audit_action(request.session_context, 'delete', 'advance_booking', pk,
                         f"Deleted advance booking on {bill_no}")
        messages.success(request, "Advance booking deleted.")
        return redirect('advance_booking:booking_list')


class AdvanceBookingPdfView(LoginRequiredMixin, View):
    def get(self, request, pk):
        booking = get_object_or_404(visible_bookings(request.session_context), pk=pk)
        pdf_buffer = generate_advance_receipt_pdf(booking)
        response = HttpResponse(pdf_buffer, content_type='application/pdf')
        response['Content-Disposition'] = f'inline; filename="advance_{booking.pk}.pdf"'
        return response
