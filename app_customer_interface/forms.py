# app_customer_interface/forms.py
from django import forms

from .order_status import REQUEST_TYPES


class OrderForm(forms.Form):
    table = forms.CharField(max_length=50)


class OrderItemForm(forms.Form):
    name = forms.CharField(max_length=100)
    quantity = forms.IntegerField(min_value=1)
    price = forms.DecimalField(min_value=0, max_digits=8, decimal_places=2)


class ServiceRequestForm(forms.Form):
    restaurant_id = forms.IntegerField()
    table = forms.CharField(max_length=50)
    type = forms.ChoiceField(choices=[(request_type, request_type) for request_type in REQUEST_TYPES])


def first_error(form):
    """Flatten a bound form's errors into one human-readable message."""
    for field, errors in form.errors.items():
        label = 'restaurantId' if field == 'restaurant_id' else field
        return f"{label}: {errors[0]}"
    return "Invalid data."
