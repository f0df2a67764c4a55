# app_staff_dashboard/broadcaster.py
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

KITCHEN_GROUP = 'kitchen'
ORDER_MANAGEMENT_GROUP = 'order_management'


class OrderBroadcaster:
    """Pushes newly placed orders to every connected kitchen and order-management screen.

    Delivery is fire-and-forget: a screen that is not connected when the order
    is placed never sees the event and has to resync instead.
    """

    def __init__(self, groups=(KITCHEN_GROUP, ORDER_MANAGEMENT_GROUP), channel_layer=None):
        self.groups = tuple(groups)
        self._channel_layer = channel_layer

    @property
    def channel_layer(self):
        if self._channel_layer is None:
            self._channel_layer = get_channel_layer()
        return self._channel_layer

    def publish_new_order(self, payload):
        channel_layer = self.channel_layer
        if channel_layer is None:
            logger.warning("Channel layer not available. Order %s was not broadcast.", payload.get('id'))
            return

        for group in self.groups:
            try:
                async_to_sync(channel_layer.group_send)(group, {'type': 'order.new', 'order': payload})
            except Exception:
                logger.exception("Failed to broadcast order %s to group '%s'", payload.get('id'), group)
