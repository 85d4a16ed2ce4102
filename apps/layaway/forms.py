from django import forms

from apps.billing.models import Bill, PAYMENT_TYPE_CHOICES
from apps.core.forms import AmountRangeFilterForm, DateRangeFilterForm
from .models import LayawayTransaction
from .summaries import remaining_balance


class LayawayTransactionForm(forms.ModelForm):
    class Meta:
        model = LayawayTransaction
        fields = ['bill', 'payment_date', 'amount', 'payment_method', 'reference_number', 'notes']
        widgets = {
            'bill': forms.Select(attrs={'class': 'form-select'}),
            'payment_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'amount': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'payment_method': forms.Select(attrs={'class': 'form-select'}),
            'reference_number': forms.TextInput(attrs={'class': 'form-control'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        bills = kwargs.pop('bills', None)
        super().__init__(*args, **kwargs)
        queryset = bills if bills is not None else Bill.objects.all()
        self.fields['bill'].queryset = queryset.exclude(bill_status=Bill.STATUS_CANCELLED)

    def clean(self):
        cleaned_data = super().clean()
        bill = cleaned_data.get('bill')
        amount = cleaned_data.get('amount')
        if bill is not None and amount is not None and amount > 0:
            remaining = remaining_balance(bill, exclude=self.instance)
            if amount > remaining:
                self.add_error('amount', f"Payment exceeds the remaining balance of {remaining:.2f}.")
        return cleaned_data


class LayawayBillFilterForm(DateRangeFilterForm):
    bill_no = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Bill No'})
    )
    customer = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Customer name / phone'})
    )


class LayawayTransactionFilterForm(AmountRangeFilterForm):
    payment_method = forms.ChoiceField(
        required=False,
        choices=[('all', 'All')] + PAYMENT_TYPE_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    bill_no = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Bill No'})
    )
    customer = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Customer name / phone'})
    )


class PaymentTrackingFilterForm(AmountRangeFilterForm):
    kind = forms.ChoiceField(
        required=False,
        choices=[('all', 'All'), ('advance', 'Advance booking'), ('layaway', 'Layaway')],
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    status = forms.ChoiceField(
        required=False,
        choices=[('all', 'All'), ('active', 'Active'), ('delivered', 'Delivered'),
                 ('cancelled', 'Cancelled'), ('completed', 'Completed')],
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    bill_no = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Bill No'})
    )
    customer = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Customer name / phone'})
    )
