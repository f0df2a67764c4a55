# app_owner_admin_panel/admin.py
from django.contrib import admin
from .models import Restaurant, ClientProfile


class RestaurantAdmin(admin.ModelAdmin):
    list_display = ('name', 'address', 'contact', 'dish_time_warning')
    search_fields = ('name', 'address', 'contact')


class ClientProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'restaurant')
    list_filter = ('restaurant__name',)
    search_fields = ('user__username', 'restaurant__name')


admin.site.register(Restaurant, RestaurantAdmin)
admin.site.register(ClientProfile, ClientProfileAdmin)
