"""
Views for sales billing.
"""

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import Prefetch
from django.http import HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.utils import timezone
from django.views.generic import DetailView, ListView, View

from apps.core.filters import contains, date_range, exact, number_range
from apps.core.mixins import (
    BillEditorRequiredMixin, FilteredListMixin, ShopAdminRequiredMixin, WriteAccessRequiredMixin,
)
from apps.inventory.models import GoldRate
from .calculator import calculate_bill
from .forms import BillFilterForm, BillForm, BillItemFormSet, PaymentFormSet, SaleReturnForm
from .models import Bill, BillItem
from .receipts import generate_invoice_pdf
from .services import (
    BillHeader, BillingError, cancel_bill, delete_bill, load_bill_draft, normalize_payments,
    persist_bill, process_return,
)

logger = logging.getLogger(__name__)


def visible_bills(context):
    """Staff without non-GST authority only ever see GST bills."""
    bills = Bill.objects.select_related('customer', 'staff')
    if not context.may_sell_non_gst:
        bills = bills.filter(sale_type='gst')
    return bills


class BillListView(LoginRequiredMixin, FilteredListMixin, ListView):
    model = Bill
    template_name = 'billing/bill_list.html'
    context_object_name = 'bills'
    filter_form_class = BillFilterForm

    def get_rows(self):
        return list(visible_bills(self.request.session_context))

    def get_predicates(self, filters):
        staff = filters.get('staff')
        return [
            date_range('bill_date', filters.get('start_date'), filters.get('end_date')),
            number_range('grand_total', filters.get('min_amount'), filters.get('max_amount')),
            contains('bill_no', filters.get('bill_no')),
            contains(['customer.name', 'customer.phone'], filters.get('customer')),
            exact('sale_type', filters.get('sale_type')),
            exact('bill_status', filters.get('bill_status')),
            exact('staff_id', staff.pk if staff else None),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['totals'] = {
            'grand_total': sum(b.grand_total for b in self.filtered_rows),
            'amount_payable': sum(b.amount_payable for b in self.filtered_rows),
            'gst_amount': sum(b.gst_amount for b in self.filtered_rows),
        }
        return context


class BillDetailView(LoginRequiredMixin, DetailView):
    model = Bill
    template_name = 'billing/bill_detail.html'
    context_object_name = 'bill'

    def get_queryset(self):
        return visible_bills(self.request.session_context).prefetch_related(
            Prefetch('items', queryset=BillItem.objects.select_related('item'))
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['old_gold'] = getattr(self.object, 'old_gold_exchange', None)
        context['returns'] = self.object.returns.select_related('bill_item')
        context['return_form'] = SaleReturnForm(
            initial={'deduction_percent': settings.SWARNA_RETURN_DEDUCTION_PERCENT}
        )
        return context


class BillFormMixin:
    """Shared GET/POST handling for the create and edit screens."""
    template_name = 'billing/bill_form.html'
    bill = None

    def daily_rate(self):
        return GoldRate.objects.current_rate()

    def build_forms(self, data=None, initial=None, items_initial=None, payments_initial=None):
        session_context = self.request.session_context
        form = BillForm(data, initial=initial, session_context=session_context,
                        daily_rate=self.daily_rate())
        items = BillItemFormSet(data, initial=items_initial, prefix='items')
        payments = PaymentFormSet(data, initial=payments_initial, prefix='payments')
        return form, items, payments

    def render_forms(self, form, items, payments, totals=None):
        return render(self.request, self.template_name, {
            'form': form,
            'items': items,
            'payments': payments,
            'bill': self.bill,
            'totals': totals,
            'daily_rate': self.daily_rate(),
        })

    def post(self, request, *args, **kwargs):
        form, items, payments = self.build_forms(request.POST)
        if not (form.is_valid() and items.is_valid() and payments.is_valid()):
            return self.render_forms(form, items, payments)

        try:
            draft = form.build_draft(items.line_items())
            header = BillHeader(
                customer_id=form.cleaned_data['customer'].pk if form.cleaned_data.get('customer') else None,
                bill_date=form.cleaned_data['bill_date'],
                bill_status=form.cleaned_data['bill_status'],
                payments=normalize_payments(
                    f.cleaned_data for f in payments.forms
                    if f.cleaned_data and not f.cleaned_data.get('DELETE')
                ),
                remarks=form.cleaned_data.get('remarks', ''),
            )
            bill = persist_bill(request.session_context, header, draft, bill=self.bill)
        except ValidationError as e:
            form.add_error(None, e)
            return self.render_forms(form, items, payments)
        except BillingError as e:
            messages.error(request, str(e))
            return self.render_forms(form, items, payments)
        except DatabaseError as e:
            logger.exception(f"Saving bill failed: {str(e)}")
            messages.error(request, "The bill could not be saved. Please try again.")
            return self.render_forms(form, items, payments)

        messages.success(request, f"Bill {bill.bill_no} saved.")
        return redirect('billing:bill_detail', pk=bill.pk)


class BillCreateView(LoginRequiredMixin, WriteAccessRequiredMixin, BillFormMixin, View):
    def get(self, request):
        form, items, payments = self.build_forms(
            initial={'bill_date': timezone.localdate(), 'customer': request.GET.get('customer')},
        )
        return self.render_forms(form, items, payments)


class BillUpdateView(LoginRequiredMixin, BillEditorRequiredMixin, BillFormMixin, View):
    def load_bill(self, pk):
        self.bill = get_object_or_404(visible_bills(self.request.session_context), pk=pk)
        return not (self.bill.is_cancelled or self.bill.has_returns)

    def locked_redirect(self):
        reason = 'is cancelled' if self.bill.is_cancelled else 'has returned items'
        messages.error(self.request, f"Bill {self.bill.bill_no} {reason} and cannot be edited.")
        return redirect('billing:bill_detail', pk=self.bill.pk)

    def post(self, request, pk):
        if not self.load_bill(pk):
            return self.locked_redirect()
        return super().post(request)

    def get(self, request, pk):
        if not self.load_bill(pk):
            return self.locked_redirect()
        header, draft = load_bill_draft(self.bill)
        old_gold = draft.old_gold
        surcharge = draft.surcharge
        initial = {
            'customer': header.customer_id,
            'bill_date': header.bill_date,
            'sale_type': draft.sale_type,
            'bill_status': header.bill_status,
            'discount': draft.discount,
            'target_payable': draft.target_payable or '',
            'mc_weight': surcharge.weight or None,
            'mc_rate': surcharge.rate or None,
            'mc_total': surcharge.total or None,
            'remarks': header.remarks,
        }
        if old_gold is not None:
            initial.update({
                'og_weight': old_gold.weight,
                'og_rate': old_gold.rate,
                'og_purity': old_gold.purity,
                'og_hsn_code': old_gold.hsn_code,
                'og_particulars': old_gold.particulars,
            })
        items_initial = [
            {
                'item_id': line.item_id,
                'barcode': line.barcode,
                'item_name': line.item_name,
                'weight': line.weight,
                'rate': line.rate,
                'making_charges': line.making_charges,
            }
            for line in draft.items
        ]
        form, items, payments = self.build_forms(
            initial=initial, items_initial=items_initial, payments_initial=list(header.payments),
        )
        return self.render_forms(form, items, payments, totals=calculate_bill(draft))


class BillPreviewView(LoginRequiredMixin, View):
    """
    Recalculate totals for the billing screen.

    Called by the page a second after the last edit; when a target payable
    is typed the reconciled surcharge is returned so the page can show it.
    """

    def post(self, request):
        form = BillForm(request.POST, session_context=request.session_context,
                        daily_rate=GoldRate.objects.current_rate())
        items = BillItemFormSet(request.POST, prefix='items')
        if not (form.is_valid() and items.is_valid()):
            errors = {name: [str(m) for m in msgs] for name, msgs in form.errors.items()}
            errors['items'] = [str(m) for m in items.non_form_errors()]
            for row in items.errors:
                errors['items'] += [str(m) for msgs in row.values() for m in msgs]
            return JsonResponse({'ok': False, 'errors': errors}, status=400)

        try:
            draft = form.build_draft(items.line_items()).reconciled()
        except ValidationError as e:
            return JsonResponse({'ok': False, 'errors': {'__all__': e.messages}}, status=400)

        totals = calculate_bill(draft)
        old_gold = draft.old_gold
        return JsonResponse({
            'ok': True,
            'totals': totals.as_dict(),
            'surcharge': {
                'weight': str(draft.surcharge.weight),
                'rate': str(draft.surcharge.rate),
                'total': str(draft.surcharge.total),
            },
            'old_gold': {
                'rate': str(old_gold.rate) if old_gold else '',
                'total': str(old_gold.total) if old_gold else '0',
            },
        })


class BillCancelView(LoginRequiredMixin, BillEditorRequiredMixin, View):
    def post(self, request, pk):
        bill = get_object_or_404(visible_bills(request.session_context), pk=pk)
        try:
            cancel_bill(request.session_context, bill)
            messages.success(request, f"Bill {bill.bill_no} cancelled.")
        except BillingError as e:
            messages.error(request, str(e))
        except DatabaseError as e:
            logger.exception(f"Cancelling bill {bill.bill_no} failed: {str(e)}")
            messages.error(request, "The bill could not be cancelled. Please try again.")
        return redirect('billing:bill_detail', pk=pk)


class BillDeleteView(LoginRequiredMixin, ShopAdminRequiredMixin, View):
    def get(self, request, pk):
        bill = get_object_or_404(Bill, pk=pk)
        return render(request, 'billing/bill_confirm_delete.html', {'bill': bill})

    def post(self, request, pk):
        bill = get_object_or_404(Bill, pk=pk)
        bill_no = bill.bill_no
        try:
            delete_bill(request.session_context, bill)
        except BillingError as e:
            messages.error(request, str(e))
            return redirect('billing:bill_detail', pk=pk)
        except DatabaseError as e:
            logger.exception(f"Deleting bill {bill_no} failed: {str(e)}")
            messages.error(request, "The bill could not be deleted.")
            return redirect('billing:bill_detail', pk=pk)
        messages.success(request, f"Bill {bill_no} deleted.")
        return redirect('billing:bill_list')


class BillPdfView(LoginRequiredMixin, View):
    def get(self, request, pk):
        bill = get_object_or_404(
            visible_bills(request.session_context).prefetch_related('items'), pk=pk
        )
        pdf_buffer = generate_invoice_pdf(bill)
        response = HttpResponse(pdf_buffer, content_type='application/pdf')
        response['Content-Disposition'] = f'inline; filename="{bill.bill_no}.pdf"'
        return response


class SaleReturnView(LoginRequiredMixin, WriteAccessRequiredMixin, View):
    def post(self, request, pk, item_pk):
        bill = get_object_or_404(visible_bills(request.session_context), pk=pk)
        bill_item = get_object_or_404(BillItem, pk=item_pk, bill=bill)
        form = SaleReturnForm(request.POST)
        if not form.is_valid():
            messages.error(request, "Enter a deduction between 0 and 100 percent.")
            return redirect('billing:bill_detail', pk=pk)
        try:
            sale_return = process_return(
                request.session_context, bill_item,
                deduction_percent=form.cleaned_data['deduction_percent'],
                reason=form.cleaned_data.get('reason', ''),
            )
            messages.success(request, f"Return recorded. Refund {sale_return.refund_amount}.")
        except (BillingError, ValidationError) as e:
            messages.error(request, ' '.join(getattr(e, 'messages', [str(e)])))
        except DatabaseError as e:
            logger.exception(f"Return on {bill.bill_no} failed: {str(e)}")
            messages.error(request, "The return could not be recorded.")
        return redirect('billing:bill_detail', pk=pk)
