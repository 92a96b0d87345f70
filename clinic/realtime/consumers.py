import json

from asgiref.sync import sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from clinic.services.local_store import get_store
from clinic.services.pharmacy import COLLECTION, FEED_GROUP


class InventoryFeedConsumer(AsyncWebsocketConsumer):
    """Pushes simulated pharmacy stock changes to the browser."""
    GROUP = FEED_GROUP

    async def connect(self):
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        items = await sync_to_async(get_store().get_all)(COLLECTION)
        await self.send(json.dumps({"type": "inventory.snapshot", "items": items}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def inventory_update(self, event):
        # event: {"type": "inventory.update", "item": {...}}
        await self.send(json.dumps(event))
