# In app_customer_interface/models.py
from decimal import Decimal

from django.db import models
from django.utils import timezone

from app_owner_admin_panel.models import Restaurant
from .exceptions import ValidationError
from .order_status import PENDING, SERVED, PAID, REQUEST_PENDING, REQUEST_RESOLVED, WAITER, BILL


class Order(models.Model):
    STATUS_CHOICES = [
        (PENDING, 'pending'),
        (SERVED, 'served'),
        (PAID, 'paid'),
    ]

    order_id = models.AutoField(primary_key=True)
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE)
    table = models.CharField(max_length=50)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    created_at = models.DateTimeField(default=timezone.now)
    served_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['restaurant', 'created_at'], name='order_restaurant_created_idx'),
            models.Index(fields=['table', 'status'], name='order_table_status_idx'),
        ]

    def calculate_total_amount(self):
        total_amount = Decimal('0.00')
        for order_item in self.orderitem_set.all():
            total_amount += order_item.item_total_price
        return total_amount

    def to_payload(self):
        """JSON-safe representation shared by the HTTP endpoints and the live feed."""
        return {
            'id': self.order_id,
            'restaurant': self.restaurant_id,
            'table': self.table,
            'status': self.status,
            'created_at': self.created_at.isoformat(),
            'served_at': self.served_at.isoformat() if self.served_at else None,
            'items': [item.to_payload() for item in self.orderitem_set.all()],
            'total': str(self.calculate_total_amount()),
        }

    def __str__(self):
        return f"Order {self.order_id} (table {self.table}) - {self.status}"


class OrderItem(models.Model):
    order_item_id = models.AutoField(primary_key=True)
    order = models.ForeignKey(Order, on_delete=models.CASCADE)
    name = models.CharField(max_length=100)
    quantity = models.PositiveIntegerField()
    price = models.DecimalField(max_digits=8, decimal_places=2)

    class Meta:
        ordering = ['order_item_id']

    @property
    def item_total_price(self):
        return self.price * self.quantity

    def save(self, *args, **kwargs):
        # Placed orders are corrected with new orders, never edited.
        if self.pk is not None and OrderItem.objects.filter(pk=self.pk).exists():
            raise ValidationError("Order items cannot be changed after the order is placed.")
        super().save(*args, **kwargs)

    def to_payload(self):
        return {
            'name': self.name,
            'quantity': self.quantity,
            'price': str(self.price),
        }

    def __str__(self):
        return f"{self.name} (x{self.quantity})"


class ServiceRequest(models.Model):
    REQUEST_TYPE_CHOICES = [
        (WAITER, 'Call waiter'),
        (BILL, 'Request bill'),
    ]

    STATUS_CHOICES = [
        (REQUEST_PENDING, 'pending'),
        (REQUEST_RESOLVED, 'resolved'),
    ]

    request_id = models.AutoField(primary_key=True)
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE)
    table = models.CharField(max_length=50)
    request_type = models.CharField(max_length=10, choices=REQUEST_TYPE_CHOICES)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=REQUEST_PENDING)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['restaurant', 'status'], name='request_restaurant_status_idx'),
        ]

    def to_payload(self):
        return {
            'id': self.request_id,
            'restaurant': self.restaurant_id,
            'table': self.table,
            'type': self.request_type,
            'status': self.status,
            'created_at': self.created_at.isoformat(),
        }

    def __str__(self):
        return f"{self.get_request_type_display()} - table {self.table} ({self.status})"
