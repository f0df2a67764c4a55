# app_owner_admin_panel/urls.py

from django.urls import path
from . import views

urlpatterns = [
    path('orders/', views.order_management_view, name='order_management'),
    path('revenue/', views.get_total_amount, name='get_total_amount'),
]
