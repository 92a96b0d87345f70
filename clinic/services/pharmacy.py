"""
Live pharmacy inventory simulation.

Stands in for a real pharmacy feed: every tick one random item gains or
loses a unit of stock, the change is written to the local store's
``inventory`` collection and published to the ``inventory`` channel
group, where :class:`clinic.realtime.consumers.InventoryFeedConsumer`
forwards it to connected browsers.

The simulator owns its worker thread.  ``start()`` launches it and
``stop()`` cancels it; ticks never overlap.
"""
from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Optional

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings

from clinic.services.local_store import ObjectStore, get_store, uid

logger = logging.getLogger(__name__)

COLLECTION = 'inventory'
FEED_GROUP = 'inventory'

SEED_ITEMS = [
    {'name': 'Paracetamol 500mg', 'stock': 42, 'pharmacy': 'Nabha Civil Hospital'},
    {'name': 'Azithromycin 250mg', 'stock': 20, 'pharmacy': 'Nabha Civil Hospital'},
    {'name': 'ORS Pack', 'stock': 80, 'pharmacy': 'Village PHC'},
    {'name': 'Amoxicillin 500mg', 'stock': 12, 'pharmacy': 'Village PHC'},
    {'name': 'Cetirizine 10mg', 'stock': 50, 'pharmacy': 'Private Chemist'},
]


def _now_ms() -> int:
    return int(time.time() * 1000)


def broadcast_inventory_update(item: dict) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    async_to_sync(channel_layer.group_send)(FEED_GROUP, {'type': 'inventory.update', 'item': item})


class InventorySimulator:
    def __init__(
        self,
        store: Optional[ObjectStore] = None,
        *,
        interval: Optional[float] = None,
        rng: Optional[random.Random] = None,
        publish: Optional[Callable[[dict], None]] = broadcast_inventory_update,
    ):
        self.store = store or get_store()
        self.interval = interval if interval is not None else settings.PHARMACY_TICK_SECONDS
        self.rng = rng or random.Random()
        self.publish = publish
        self.items: list[dict] = []
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def load(self) -> list[dict]:
        """Read the collection, seeding the demo items on first use."""
        self.items = self.store.get_all(COLLECTION)
        if not self.items:
            self.items = [{'id': uid('med'), 'updatedAt': _now_ms(), **seed} for seed in SEED_ITEMS]
            for item in self.items:
                self.store.put_item(COLLECTION, item)
            logger.info('Seeded %d pharmacy items', len(self.items))
        return self.items

    def tick(self) -> Optional[dict]:
        if not self.items:
            return None
        idx = self.rng.randrange(len(self.items))
        delta = -1 if self.rng.random() < 0.5 else 1
        item = dict(self.items[idx])
        item['stock'] = max(0, int(item.get('stock', 0)) + delta)
        item['updatedAt'] = _now_ms()
        self.store.put_item(COLLECTION, item)
        self.items[idx] = item
        logger.debug('Stock of %s at %s is now %s', item.get('name'), item.get('pharmacy'), item['stock'])
        if self.publish is not None:
            self.publish(item)
        return item

    def run(self, ticks: Optional[int] = None) -> None:
        """Tick every ``interval`` seconds until stopped or ``ticks`` ran."""
        done = 0
        while not self._stop.wait(self.interval):
            try:
                self.tick()
            except Exception:
                logger.exception('Pharmacy simulation tick failed')
            done += 1
            if ticks is not None and done >= ticks:
                break

    def start(self, ticks: Optional[int] = None) -> None:
        if self.running:
            return
        self.load()
        self._stop.clear()
        self._thread = threading.Thread(
            target=self.run, kwargs={'ticks': ticks}, name='pharmacy-simulator', daemon=True
        )
        self._thread.start()
        logger.info('Pharmacy simulation started (every %ss)', self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.info('Pharmacy simulation stopped')

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def __enter__(self) -> 'InventorySimulator':
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
