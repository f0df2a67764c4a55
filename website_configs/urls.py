from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('app_owner/', include('app_owner_admin_panel.urls')),
    path('app_staff/', include('app_staff_dashboard.urls')),
    path('app_customer/', include('app_customer_interface.urls')),
]
