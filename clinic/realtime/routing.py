from django.urls import path

from clinic.realtime.consumers import InventoryFeedConsumer

websocket_urlpatterns = [
    path("ws/inventory/", InventoryFeedConsumer.as_asgi()),
]
