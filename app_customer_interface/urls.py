# app_customer_interface/urls.py

from django.urls import path
from . import views

urlpatterns = [
    path('orders/', views.create_order_view, name='create_order'),
    path('<int:restaurant_id>/table/<str:table>/', views.table_state_view, name='table_state'),
    path('requests/', views.create_service_request_view, name='create_service_request'),
]
