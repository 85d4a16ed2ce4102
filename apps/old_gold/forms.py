from django import forms

from apps.core.forms import DateRangeFilterForm


class OldGoldFilterForm(DateRangeFilterForm):
    q = forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Bill no, customer or particulars'})
    )
