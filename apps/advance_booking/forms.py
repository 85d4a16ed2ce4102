from django import forms

from apps.billing.models import Bill
from apps.core.forms import AmountRangeFilterForm
from .models import AdvanceBooking


class AdvanceBookingForm(forms.ModelForm):
    class Meta:
        model = AdvanceBooking
        fields = ['bill', 'booking_date', 'delivery_date', 'advance_amount', 'total_amount',
                  'item_description', 'customer_notes', 'booking_status']
        widgets = {
            'bill': forms.Select(attrs={'class': 'form-select'}),
            'booking_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'delivery_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'advance_amount': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'total_amount': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'item_description': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'customer_notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'booking_status': forms.Select(attrs={'class': 'form-select'}),
        }

    def __init__(self, *args, **kwargs):
        bills = kwargs.pop('bills', None)
        super().__init__(*args, **kwargs)
        queryset = bills if bills is not None else Bill.objects.all()
        self.fields['bill'].queryset = queryset.exclude(bill_status=Bill.STATUS_CANCELLED)


class AdvanceBookingFilterForm(AmountRangeFilterForm):
    booking_status = forms.ChoiceField(
        required=False,
        choices=[('all', 'All')] + AdvanceBooking.STATUS_CHOICES,
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
