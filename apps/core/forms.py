"""
Forms for the core module.
"""

from django import forms

from .models import AuditLog, User


class DateRangeFilterForm(forms.Form):
    """Base filter form: every list screen offers a date range."""
    start_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'type': 'date', 'class': 'form-control'})
    )
    end_date = forms.DateField(
        required=False,
        widget=forms.DateInput(attrs={'type': 'date', 'class': 'form-control'})
    )


class AmountRangeFilterForm(DateRangeFilterForm):
    min_amount = forms.DecimalField(
        required=False, min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )
    max_amount = forms.DecimalField(
        required=False, min_value=0,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.01'})
    )


class AuditLogFilterForm(DateRangeFilterForm):
    user = forms.ModelChoiceField(
        queryset=User.objects.all(), required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    action = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Action'})
    )
    entity_type = forms.ChoiceField(
        required=False,
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        entity_types = (
            AuditLog.objects.exclude(entity_type='')
            .values_list('entity_type', flat=True).distinct().order_by('entity_type')
        )
        self.fields['entity_type'].choices = [('all', 'All')] + [(e, e) for e in entity_types]
