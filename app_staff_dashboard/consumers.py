import json
import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings

from app_customer_interface.services import get_order_store
from app_owner_admin_panel.models import Restaurant
from .broadcaster import KITCHEN_GROUP, ORDER_MANAGEMENT_GROUP

logger = logging.getLogger(__name__)


class OrderNotificationConsumer(AsyncWebsocketConsumer):
    """Live order feed for the order-management screen.

    On connect (and whenever the client asks) the full order list is sent so a
    screen that missed broadcasts while disconnected catches up.
    """
    group_name = ORDER_MANAGEMENT_GROUP

    async def connect(self):
        self.restaurant_id = self.get_restaurant_id()

        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.send_snapshot()

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        try:
            message = json.loads(text_data or '{}')
        except ValueError:
            logger.debug("Ignoring malformed websocket message: %r", text_data)
            return

        action = message.get('action') if isinstance(message, dict) else None
        if action == 'resync':
            await self.send_snapshot()
        elif action == 'ping':
            await self.send(text_data=json.dumps({'type': 'pong'}))

    async def order_new(self, event):
        if self.restaurant_id is not None and event['order'].get('restaurant') != self.restaurant_id:
            return
        await self.send(text_data=json.dumps({
            'type': 'order:new',
            'order': event['order'],
        }))

    async def send_snapshot(self):
        orders = await database_sync_to_async(self.fetch_orders)()
        await self.send(text_data=json.dumps({
            'type': 'orders:sync',
            'orders': orders,
            'resync_interval': settings.ORDER_RESYNC_INTERVAL_SECONDS,
        }))

    def get_restaurant_id(self):
        query = parse_qs(self.scope.get('query_string', b'').decode())
        values = query.get('restaurant')
        if not values:
            return None
        try:
            return int(values[0])
        except ValueError:
            return None

    def order_payloads(self, list_orders):
        """Payloads from ``list_orders``; empty when the requested restaurant does not exist."""
        restaurant = None
        if self.restaurant_id is not None:
            restaurant = Restaurant.objects.filter(pk=self.restaurant_id).first()
            if restaurant is None:
                return []
        return [order.to_payload() for order in list_orders(restaurant=restaurant)]

    def fetch_orders(self):
        return self.order_payloads(get_order_store().list_orders)


class KitchenConsumer(OrderNotificationConsumer):
    """Kitchen tickets: same feed, but the snapshot only holds unpaid orders."""
    group_name = KITCHEN_GROUP

    def fetch_orders(self):
        return self.order_payloads(get_order_store().list_active_orders)
