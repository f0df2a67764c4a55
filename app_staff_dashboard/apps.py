from django.apps import AppConfig


class StaffDashboardConfig(AppConfig):
    default_auto_field = 'django.db.models.AutoField'
    name = 'app_staff_dashboard'
