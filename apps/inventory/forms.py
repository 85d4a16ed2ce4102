from django import forms
from django.utils import timezone

from .models import GoldRate, Item


class ItemForm(forms.ModelForm):
    class Meta:
        model = Item
        fields = ['barcode', 'item_name', 'category', 'weight', 'purity', 'making_charges', 'stone_type',
                  'hsn_code', 'gst_rate', 'price_per_gram', 'net_price', 'stock_status', 'location',
                  'remarks']
        widgets = {
            'barcode': forms.TextInput(attrs={'class': 'form-control'}),
            'item_name': forms.TextInput(attrs={'class': 'form-control'}),
            'category': forms.TextInput(attrs={'class': 'form-control'}),
            'weight': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.001'}),
            'purity': forms.TextInput(attrs={'class': 'form-control'}),
            'making_charges': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'stone_type': forms.TextInput(attrs={'class': 'form-control'}),
            'hsn_code': forms.TextInput(attrs={'class': 'form-control'}),
            'gst_rate': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'price_per_gram': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'net_price': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
            'stock_status': forms.Select(attrs={'class': 'form-select'}),
            'location': forms.TextInput(attrs={'class': 'form-control'}),
            'remarks': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }

    def clean_weight(self):
        weight = self.cleaned_data['weight']
        if weight is not None and weight <= 0:
            raise forms.ValidationError("Weight must be greater than zero.")
        return weight

    def clean(self):
        cleaned_data = super().clean()
        for field in ('making_charges', 'gst_rate', 'price_per_gram', 'net_price'):
            value = cleaned_data.get(field)
            if value is not None and value < 0:
                self.add_error(field, "Cannot be negative.")
        return cleaned_data


class ItemFilterForm(forms.Form):
    q = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Barcode or name'})
    )
    category = forms.ChoiceField(
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    stock_status = forms.ChoiceField(
        required=False,
        choices=[('all', 'All')] + Item.STATUS_CHOICES,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        categories = (
            Item.objects.exclude(category='').values_list('category', flat=True)
            .distinct().order_by('category')
        )
        self.fields['category'].choices = [('all', 'All')] + [(c, c) for c in categories]


class ImportForm(forms.Form):
    IMPORT_ITEMS = 'items'
    IMPORT_GOLD_RATES = 'gold_rates'

    import_type = forms.ChoiceField(
        choices=[(IMPORT_ITEMS, 'Stock items'), (IMPORT_GOLD_RATES, 'Gold rates')],
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    file = forms.FileField(
        help_text="CSV, Excel (.xlsx) or JSON",
        widget=forms.ClearableFileInput(attrs={'class': 'form-control'})
    )


class GoldRateForm(forms.ModelForm):
    class Meta:
        model = GoldRate
        fields = ['effective_date', 'rate_per_gram']
        widgets = {
            'effective_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'rate_per_gram': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['effective_date'].initial = timezone.localdate()

    def validate_unique(self):
        # An existing date is updated in place by the view
        pass

    def clean_rate_per_gram(self):
        rate = self.cleaned_data['rate_per_gram']
        if rate <= 0:
            raise forms.ValidationError("Rate must be greater than zero.")
        return rate
