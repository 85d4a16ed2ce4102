"""
Forms for purchase slips.
"""

from django import forms
from django.forms import inlineformset_factory

from apps.billing.models import Bill
from apps.core.forms import AmountRangeFilterForm
from .models import PurchaseBill, PurchaseItem


class PurchaseBillForm(forms.ModelForm):
    class Meta:
        model = PurchaseBill
        fields = ['customer', 'purchase_date', 'sale_bill', 'particulars', 'payment_mode',
                  'payment_reference', 'remarks']
        widgets = {
            'customer': forms.Select(attrs={'class': 'form-select'}),
            'purchase_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'sale_bill': forms.Select(attrs={'class': 'form-select'}),
            'particulars': forms.TextInput(attrs={'class': 'form-control'}),
            'payment_mode': forms.Select(attrs={'class': 'form-select'}),
            'payment_reference': forms.TextInput(attrs={'class': 'form-control'}),
            'remarks': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        bills = kwargs.pop('bills', None)
        super().__init__(*args, **kwargs)
        queryset = bills if bills is not None else Bill.objects.all()
        self.fields['sale_bill'].queryset = queryset.exclude(bill_status=Bill.STATUS_CANCELLED)


class PurchaseItemForm(forms.ModelForm):
    class Meta:
        model = PurchaseItem
        fields = ['hsn_code', 'code', 'weight', 'purity', 'rate']
        widgets = {
            'hsn_code': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'HSN'}),
            'code': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Item code'}),
            'weight': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.001'}),
            'purity': forms.TextInput(attrs={'class': 'form-control', 'placeholder': '22K'}),
            'rate': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
        }

    def clean(self):
        cleaned_data = super().clean()
        weight = cleaned_data.get('weight')
        rate = cleaned_data.get('rate')
        if weight is not None and weight <= 0:
            self.add_error('weight', 'Weight must be greater than zero.')
        if rate is not None and rate < 0:
            self.add_error('rate', 'Rate cannot be negative.')
        return cleaned_data


PurchaseItemFormSet = inlineformset_factory(
    PurchaseBill, PurchaseItem, form=PurchaseItemForm,
    extra=1, can_delete=True, min_num=1, validate_min=True
)


class PurchaseBillFilterForm(AmountRangeFilterForm):
    purchase_no = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Purchase No'})
    )
    customer = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Customer name / phone'})
    )
