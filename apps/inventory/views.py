"""
Views for Inventory and gold rates.
"""

import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse_lazy
from django.views.generic import CreateView, FormView, ListView, UpdateView, View

from apps.core.filters import contains, exact
from apps.core.mixins import FilteredListMixin, StockEditorRequiredMixin
from apps.core.utils import log_audit_action
from .forms import GoldRateForm, ImportForm, ItemFilterForm, ItemForm
from .importers import GoldRateImporter, ItemImporter
from .models import GoldRate, Item

logger = logging.getLogger(__name__)


def item_json(item):
    return {
        'id': item.pk,
        'barcode': item.barcode,
        'item_name': item.item_name,
        'category': item.category,
        'weight': str(item.weight),
        'purity': item.purity,
        'making_charges': str(item.making_charges),
        'price_per_gram': str(item.price_per_gram),
        'hsn_code': item.hsn_code,
        'stock_status': item.stock_status,
    }


class ItemListView(LoginRequiredMixin, FilteredListMixin, ListView):
    model = Item
    template_name = 'inventory/item_list.html'
    context_object_name = 'items'
    filter_form_class = ItemFilterForm

    def get_predicates(self, filters):
        return [
            contains(['barcode', 'item_name'], filters.get('q')),
            exact('category', filters.get('category')),
            exact('stock_status', filters.get('stock_status')),
        ]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['total_weight'] = sum(item.weight for item in self.filtered_rows)
        context['can_edit_stock'] = self.request.session_context.may_edit_stock
        return context


class ItemCreateView(LoginRequiredMixin, StockEditorRequiredMixin, CreateView):
    model = Item
    form_class = ItemForm
    template_name = 'inventory/item_form.html'
    success_url = reverse_lazy('inventory:item_list')

    def form_valid(self, form):
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'create', 'item', self.object.pk,
                         f"Added item {self.object.barcode}")
        messages.success(self.request, f"Item {self.object.barcode} added.")
        return response


class ItemUpdateView(LoginRequiredMixin, StockEditorRequiredMixin, UpdateView):
    model = Item
    form_class = ItemForm
    template_name = 'inventory/item_form.html'
    success_url = reverse_lazy('inventory:item_list')

    def form_valid(self, form):
        response = super().form_valid(form)
        log_audit_action(self.request.session_context, 'update', 'item', self.object.pk,
                         f"Updated item {self.object.barcode}")
        messages.success(self.request, f"Item {self.object.barcode} updated.")
        return response


class ItemDeleteView(LoginRequiredMixin, StockEditorRequiredMixin, View):
    def get(self, request, pk):
        item = get_object_or_404(Item, pk=pk)
        return render(request, 'inventory/item_confirm_delete.html', {'item': item})

    def post(self, request, pk):
        item = get_object_or_404(Item, pk=pk)
        barcode = item.barcode
        try:
            item.delete()
        except DatabaseError as e:
            logger.error(f"Deleting item {barcode} failed: {str(e)}")
            messages.error(request, "The item could not be deleted.")
            return redirect('inventory:item_list')
        log_audit_action(request.session_context, 'delete', 'item', pk, f"Deleted item {barcode}")
        messages.success(request, f"Item {barcode} deleted.")
        return redirect('inventory:item_list')


class ItemImportView(LoginRequiredMixin, StockEditorRequiredMixin, FormView):
    form_class = ImportForm
    template_name = 'inventory/import.html'

    def form_valid(self, form):
        importer_class = ItemImporter
        if form.cleaned_data['import_type'] == ImportForm.IMPORT_GOLD_RATES:
            importer_class = GoldRateImporter
        result = importer_class(form.cleaned_data['file'], self.request.session_context).process()

        if result['success']:
            messages.success(
                self.request,
                f"Imported: {result['created']} created, {result['updated']} updated, "
                f"{result['skipped']} skipped."
            )
        else:
            for error in result['errors']:
                messages.error(self.request, error)
        return render(self.request, self.template_name, {'form': form, 'result': result})


class ItemLookupView(LoginRequiredMixin, View):
    """Exact barcode lookup; a miss is a normal answer, not an error."""

    def get(self, request):
        barcode = request.GET.get('barcode', '').strip()
        item = None
        if barcode:
            item = Item.objects.filter(barcode=barcode, stock_status=Item.STATUS_IN_STOCK).first()
        if item is None:
            return JsonResponse({'found': False})
        return JsonResponse({'found': True, 'item': item_json(item)})


class ItemSearchView(LoginRequiredMixin, View):
    def get(self, request):
        query = request.GET.get('q', '').strip()
        if len(query) < 2:
            return JsonResponse({'results': []})
        items = Item.objects.filter(
            item_name__icontains=query, stock_status=Item.STATUS_IN_STOCK
        ).order_by('item_name')[:10]
        return JsonResponse({'results': [item_json(item) for item in items]})


class GoldRateListView(LoginRequiredMixin, ListView):
    model = GoldRate
    template_name = 'inventory/gold_rate_list.html'
    context_object_name = 'rates'
    paginate_by = 20

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['current_rate'] = GoldRate.objects.current()
        context['form'] = GoldRateForm()
        return context


class GoldRateSetView(LoginRequiredMixin, StockEditorRequiredMixin, View):
    """Set the rate for a day, replacing any rate already entered for it."""

    def post(self, request):
        form = GoldRateForm(request.POST)
        if not form.is_valid():
            for errors in form.errors.values():
                for error in errors:
                    messages.error(request, error)
            return redirect('inventory:gold_rate_list')

        rate, created = GoldRate.objects.update_or_create(
            effective_date=form.cleaned_data['effective_date'],
            defaults={'rate_per_gram': form.cleaned_data['rate_per_gram']},
        )
        log_audit_action(request.session_context, 'create' if created else 'update', 'gold_rate', rate.pk,
                         f"Gold rate for {rate.effective_date}: {rate.rate_per_gram}")
        messages.success(request, f"Gold rate for {rate.effective_date} set to {rate.rate_per_gram}/g.")
        return redirect('inventory:gold_rate_list')
