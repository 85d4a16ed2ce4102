"""
Forms for the sales billing screen.
"""

from django import forms
from django.core.exceptions import ValidationError
from django.forms import formset_factory

from apps.core.forms import AmountRangeFilterForm
from apps.core.models import User
from apps.customers.models import Customer
from apps.old_gold.ledger import make_old_gold_credit
from .calculator import SALE_GST, BillDraft, make_line_item
from .models import Bill, PAYMENT_TYPE_CHOICES


class BillForm(forms.Form):
    customer = forms.ModelChoiceField(
        queryset=Customer.objects.all(), required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    bill_date = forms.DateField(
        widget=forms.DateInput(attrs={'type': 'date', 'class': 'form-control'})
    )
    sale_type = forms.ChoiceField(
        choices=Bill.SALE_TYPE_CHOICES, initial=SALE_GST,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    bill_status = forms.ChoiceField(
        choices=[(Bill.STATUS_FINALIZED, 'Finalized'), (Bill.STATUS_DRAFT, 'Draft')],
        initial=Bill.STATUS_FINALIZED,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    discount = forms.DecimalField(
        required=False, min_value=0, decimal_places=2,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    target_payable = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Final amount'})
    )

    # MC / value added
    mc_weight = forms.DecimalField(
        required=False, min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.001'})
    )
    mc_rate = forms.DecimalField(
        required=False, min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': 'any'})
    )
    mc_total = forms.DecimalField(
        required=False, min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '1'})
    )

    # Old gold exchange
    og_weight = forms.DecimalField(
        required=False, min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.001'})
    )
    og_rate = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': "Today's rate"})
    )
    og_purity = forms.CharField(
        required=False, max_length=20,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    og_hsn_code = forms.CharField(
        required=False, max_length=20,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )
    og_particulars = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )

    remarks = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )

    def __init__(self, *args, **kwargs):
        self.session_context = kwargs.pop('session_context', None)
        self.daily_rate = kwargs.pop('daily_rate', None)
        super().__init__(*args, **kwargs)
        if self.session_context is not None and not self.session_context.may_sell_non_gst:
            self.fields['sale_type'].choices = [(SALE_GST, 'GST')]

    def clean(self):
        cleaned_data = super().clean()
        try:
            cleaned_data['old_gold'] = make_old_gold_credit(
                cleaned_data.get('og_weight'),
                cleaned_data.get('og_rate'),
                purity=cleaned_data.get('og_purity'),
                hsn_code=cleaned_data.get('og_hsn_code'),
                particulars=cleaned_data.get('og_particulars'),
                daily_rate=self.daily_rate,
            )
        except ValidationError as e:
            for field, messages in e.message_dict.items():
                self.add_error(f"og_{field}", messages)
        return cleaned_data

    def build_draft(self, line_items):
        data = self.cleaned_data
        draft = BillDraft(sale_type=data['sale_type']).with_items(line_items)
        if data.get('mc_weight') or data.get('mc_rate'):
            draft = draft.with_surcharge(data.get('mc_weight'), data.get('mc_rate'))
        elif data.get('mc_total'):
            draft = draft.with_surcharge_total(data['mc_total'])
        return (
            draft.with_old_gold(data.get('old_gold'))
            .with_discount(data.get('discount'))
            .with_target_payable(data.get('target_payable'))
        )


class BillItemForm(forms.Form):
    item_id = forms.IntegerField(required=False, widget=forms.HiddenInput())
    barcode = forms.CharField(
        required=False, max_length=50,
        widget=forms.TextInput(attrs={'class': 'form-control item-barcode'})
    )
    item_name = forms.CharField(
        max_length=255,
        widget=forms.TextInput(attrs={'class': 'form-control item-name'})
    )
    weight = forms.DecimalField(
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.001'})
    )
    rate = forms.DecimalField(
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    making_charges = forms.DecimalField(
        required=False,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )

    def clean(self):
        cleaned_data = super().clean()
        if self.errors:
            return cleaned_data
        try:
            cleaned_data['line_item'] = make_line_item(
                cleaned_data.get('item_name'),
                cleaned_data.get('weight'),
                cleaned_data.get('rate'),
                cleaned_data.get('making_charges'),
                barcode=cleaned_data.get('barcode'),
                item_id=cleaned_data.get('item_id'),
            )
        except ValidationError as e:
            for field, messages in e.message_dict.items():
                self.add_error(field, messages)
        return cleaned_data


class BaseBillItemFormSet(forms.BaseFormSet):
    def line_items(self):
        return [
            form.cleaned_data['line_item']
            for form in self.forms
            if form.cleaned_data.get('line_item') and not form.cleaned_data.get('DELETE')
        ]


BillItemFormSet = formset_factory(
    BillItemForm, formset=BaseBillItemFormSet,
    extra=0, min_num=1, validate_min=True, can_delete=True
)


class PaymentForm(forms.Form):
    type = forms.ChoiceField(
        choices=PAYMENT_TYPE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    amount = forms.DecimalField(
        required=False, min_value=0, decimal_places=2,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    reference = forms.CharField(
        required=False, max_length=100,
        widget=forms.TextInput(attrs={'class': 'form-control'})
    )


PaymentFormSet = formset_factory(PaymentForm, extra=1, can_delete=True)


class BillFilterForm(AmountRangeFilterForm):
    bill_no = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Bill No'})
    )
    customer = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Customer name / phone'})
    )
    sale_type = forms.ChoiceField(
        required=False,
        choices=[('all', 'All')] + Bill.SALE_TYPE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    bill_status = forms.ChoiceField(
        required=False,
        choices=[('all', 'All')] + Bill.STATUS_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    staff = forms.ModelChoiceField(
        queryset=User.objects.all(), required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )


class SaleReturnForm(forms.Form):
    deduction_percent = forms.DecimalField(
        min_value=0, max_value=100, decimal_places=2,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    reason = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2})
    )
