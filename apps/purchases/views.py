"""
Views for purchase slips.
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.generic import CreateView, DetailView, ListView, View

from apps.billing.services import BillingError
from apps.billing.views import visible_bills
from apps.core.filters import contains, date_range, number_range
from apps.core.mixins import FilteredListMixin, ShopAdminRequiredMixin, WriteAccessRequiredMixin
from .forms import PurchaseBillFilterForm, PurchaseBillForm, PurchaseItemFormSet
from .models import PurchaseBill
from .receipts import generate_purchase_slip_pdf
from .services import delete_purchase, record_purchase

logger = logging.getLogger(__name__)


def purchase_queryset():
    return PurchaseBill.objects.select_related('customer', 'sale_bill', 'staff').prefetch_related('items')


class PurchaseBillListView(LoginRequiredMixin, FilteredListMixin, ListView):
    model = PurchaseBill
    template_name = 'purchases/purchase_list.html'
    context_object_name = 'purchases'
    filter_form_class = PurchaseBillFilterForm

    def get_rows(self):
        return list(purchase_queryset())

    def get_predicates(self, filters):
        return [
            date_range('purchase_date', filters.get('start_date'), filters.get('end_date')),
            number_range('grand_total', filters.get('min_amount'), filters.get('max_amount')),
            contains('purchase_no', filters.get('purchase_no')),
            contains(['customer.name', 'customer.phone'], filters.get('customer')),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        rows = self.filtered_rows
        context['totals'] = {
            'weight': sum(p.total_weight for p in rows),
            'subtotal': sum(p.subtotal for p in rows),
            'gst_amount': sum(p.gst_amount for p in rows),
            'grand_total': sum(p.grand_total for p in rows),
        }
        return context


class PurchaseBillCreateView(LoginRequiredMixin, WriteAccessRequiredMixin, CreateView):
    model = PurchaseBill
    form_class = PurchaseBillForm
    template_name = 'purchases/purchase_form.html'

    def get_initial(self):
        initial = super().get_initial()
        initial['purchase_date'] = timezone.localdate()
        bill_id = self.request.GET.get('bill')
        if bill_id:
            bill = visible_bills(self.request.session_context).filter(pk=bill_id).first()
            if bill is not None:
                initial['sale_bill'] = bill.pk
                initial['customer'] = bill.customer_id
        return initial

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs['bills'] = visible_bills(self.request.session_context)
        return kwargs

    def get_context_data(self, **kwargs):
        data = super().get_context_data(**kwargs)
        if 'items' not in data:
            data['items'] = PurchaseItemFormSet(prefix='items')
        return data

    def form_valid(self, form):
        items = PurchaseItemFormSet(self.request.POST, instance=form.instance, prefix='items')
        if not items.is_valid():
            return self.render_to_response(self.get_context_data(form=form, items=items))

        try:
            self.object = record_purchase(
                self.request.session_context, form.save(commit=False), items.save(commit=False)
            )
        except ValidationError as e:
            form.add_error(None, e)
            return self.render_to_response(self.get_context_data(form=form, items=items))
        except BillingError as e:
            messages.error(self.request, str(e))
            return self.render_to_response(self.get_context_data(form=form, items=items))
        except DatabaseError as e:
            logger.exception(f"Saving purchase failed: {str(e)}")
            messages.error(self.request, "The purchase could not be saved. Please try again.")
            return self.render_to_response(self.get_context_data(form=form, items=items))

        messages.success(self.request, f"Purchase {self.object.purchase_no} saved.")
        return redirect('purchases:purchase_detail', pk=self.object.pk)

    def form_invalid(self, form):
        items = PurchaseItemFormSet(self.request.POST, instance=form.instance, prefix='items')
        items.is_valid()
        return self.render_to_response(self.get_context_data(form=form, items=items))


class PurchaseBillDetailView(LoginRequiredMixin, DetailView):
    model = PurchaseBill
    template_name = 'purchases/purchase_detail.html'
    context_object_name = 'purchase'

    def get_queryset(self):
        return purchase_queryset()


class PurchaseBillPdfView(LoginRequiredMixin, View):
    def get(self, request, pk):
        purchase = get_object_or_404(purchase_queryset(), pk=pk)
        pdf_buffer = generate_purchase_slip_pdf(purchase)
        response = HttpResponse(pdf_buffer, content_type='application/pdf')
        response['Content-Disposition'] = f'inline; filename="{purchase.purchase_no}.pdf"'
        return response


class PurchaseBillDeleteView(LoginRequiredMixin, ShopAdminRequiredMixin, View):
    def get(self, request, pk):
        purchase = get_object_or_404(PurchaseBill, pk=pk)
        return render(request, 'purchases/purchase_confirm_delete.html', {'purchase': purchase})

    def post(self, request, pk):
        purchase = get_object_or_404(PurchaseBill, pk=pk)
        purchase_no = purchase.purchase_no
        try:
            delete_purchase(request.session_context, purchase)
        except BillingError as e:
            messages.error(request, str(e))
            return redirect('purchases:purchase_detail', pk=pk)
        except DatabaseError as e:
            logger.exception(f"Deleting purchase {purchase_no} failed: {str(e)}")
            messages.error(request, "The purchase could not be deleted.")
            return redirect('purchases:purchase_detail', pk=pk)
        messages.success(request, f"Purchase {purchase_no} deleted.")
        return redirect('purchases:purchase_list')
