# In app_owner_admin_panel/models.py

from django.db import models
from django.contrib.auth.models import User


class Restaurant(models.Model):
    restaurant_id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=100)
    address = models.CharField(max_length=200, blank=True)
    contact = models.CharField(max_length=15, blank=True)
    other_details = models.TextField(blank=True)
    dish_time_warning = models.IntegerField(default=30, help_text="Time in minutes after which a pending ticket is flagged as late")

    def __str__(self):
        return self.name


class ClientProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE)
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE)

    def __str__(self):
        return self.user.username


def restaurant_for_user(user):
    """Restaurant the caller works for, or None when there is no restaurant context."""
    if user is None or not user.is_authenticated:
        return None
    try:
        return user.clientprofile.restaurant
    except ClientProfile.DoesNotExist:
        return None
