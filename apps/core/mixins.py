"""
View mixins shared by the shop screens.
"""

from django.conf import settings
from django.contrib.auth.mixins import UserPassesTestMixin

from .filters import apply_filters, paginate


class ShopAdminRequiredMixin(UserPassesTestMixin):
    def test_func(self):
        return self.request.user.is_shop_admin


class WriteAccessRequiredMixin(UserPassesTestMixin):
    """Blocks read-only users from any create/edit/delete screen."""

    def test_func(self):
        return not self.request.user.is_read_only


class StockEditorRequiredMixin(UserPassesTestMixin):
    def test_func(self):
        return self.request.session_context.may_edit_stock


class BillEditorRequiredMixin(UserPassesTestMixin):
    def test_func(self):
        context = self.request.session_context
        return context.may_create_bills and context.can_edit_bills


class FilteredListMixin:
    """
    ListView mixin: load every row, filter in memory, paginate 20 per page.

    Subclasses set ``filter_form_class`` and implement ``get_predicates``.
    Submitting the filter form drops the ``page`` parameter, so any filter
    change starts again from page 1.
    """
    filter_form_class = None
    paginate_by = settings.SWARNA_PAGE_SIZE

    def get_rows(self):
        return list(super().get_queryset())

    def get_predicates(self, filters):
        return []

    def get_queryset(self):
        self.filter_form = self.filter_form_class(self.request.GET or None)
        filters = self.filter_form.cleaned_data if self.filter_form.is_valid() else {}
        self.all_rows = self.get_rows()
        self.filtered_rows = apply_filters(self.all_rows, self.get_predicates(filters))
        return self.filtered_rows

    def paginate_queryset(self, queryset, page_size):
        page = paginate(queryset, self.request.GET.get(self.page_kwarg) or 1, page_size)
        return page.paginator, page, page.object_list, page.has_other_pages()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context['filter_form'] = self.filter_form
        context['result_count'] = len(self.filtered_rows)

        # Build query string for pagination
        params = self.request.GET.copy()
        if 'page' in params:
            params.pop('page')
        context['query_params'] = '&' + params.urlencode() if params else ''
        return context
