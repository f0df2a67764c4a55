from django.apps import AppConfig


class OwnerAdminPanelConfig(AppConfig):
    default_auto_field = 'django.db.models.AutoField'
    name = 'app_owner_admin_panel'
