# app_customer_interface/admin.py
from django.contrib import admin
from .models import Order, OrderItem, ServiceRequest


# Placed items are never edited, so the inline is read-only
class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ('name', 'price', 'quantity', 'item_total_price')
    readonly_fields = ('name', 'price', 'quantity', 'item_total_price')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def item_total_price(self, obj):
        return obj.item_total_price

    item_total_price.short_description = 'Item Total Price'


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_id', 'restaurant', 'table', 'status', 'created_at', 'served_at', 'total_amount')
    list_filter = ('restaurant', 'status', 'created_at')
    search_fields = ('order_id', 'restaurant__name', 'table')
    inlines = [OrderItemInline]

    fieldsets = (
        ('Order Information', {
            'fields': (
                'order_id',
                'restaurant',
                'table',
                'status',
            ),
        }),
        ('Timing', {
            'fields': (
                'created_at',
                'served_at',
            ),
            'description': 'Served time is stamped when the kitchen marks the order as served.'
        }),
    )
    # Status changes go through OrderStore.bulk_update_status
    readonly_fields = ('order_id', 'restaurant', 'table', 'status', 'created_at', 'served_at')

    def total_amount(self, obj):
        return obj.calculate_total_amount()


@admin.register(ServiceRequest)
class ServiceRequestAdmin(admin.ModelAdmin):
    list_display = ('request_id', 'restaurant', 'table', 'request_type', 'status', 'created_at')
    list_filter = ('restaurant', 'request_type', 'status')
    search_fields = ('table', 'restaurant__name')
