# app_staff_dashboard/urls.py

from django.urls import path
from . import views

urlpatterns = [
    path('orders/', views.list_orders_view, name='list_orders'),
    path('orders/status/', views.update_order_status_view, name='update_order_status'),
    path('kitchen/', views.kitchen_board_view, name='kitchen_board'),
    path('bill/<int:restaurant_id>/<str:table>/', views.print_bill_view, name='print_bill'),
    path('requests/', views.list_service_requests_view, name='list_service_requests'),
    path('requests/<int:request_id>/resolve/', views.resolve_service_request_view, name='resolve_service_request'),
    path('requests/<int:request_id>/', views.delete_service_request_view, name='delete_service_request'),
]
