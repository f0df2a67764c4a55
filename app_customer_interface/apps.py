from django.apps import AppConfig
from django.conf import settings


class CustomerInterfaceConfig(AppConfig):
    default_auto_field = 'django.db.models.AutoField'
    name = 'app_customer_interface'

    def ready(self):
        from app_staff_dashboard.broadcaster import OrderBroadcaster
        from .services import OrderStore, ServiceRequestStore

        # One broadcaster per process, handed to the store rather than looked up globally.
        self.broadcaster = OrderBroadcaster(groups=settings.ORDER_NOTIFICATION_GROUPS)
        self.order_store = OrderStore(broadcaster=self.broadcaster)
        self.request_store = ServiceRequestStore()
