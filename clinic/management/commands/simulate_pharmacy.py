from django.core.management.base import BaseCommand

from clinic.services.local_store import open_store
from clinic.services.pharmacy import InventorySimulator


class Command(BaseCommand):
    help = "Run the live pharmacy stock simulation and broadcast changes over WebSocket."

    def add_arguments(self, parser):
        parser.add_argument('--interval', type=float, default=None,
                            help='Seconds between stock changes (default PHARMACY_TICK_SECONDS).')
        parser.add_argument('--ticks', type=int, default=None,
                            help='Stop after this many changes (default: run until interrupted).')
        parser.add_argument('--backend', choices=['auto', 'structured', 'fallback'], default=None,
                            help='Force a local store backend.')

    def handle(self, *args, **options):
        store = open_store(options['backend']) if options['backend'] else None
        simulator = InventorySimulator(store, interval=options['interval'])
        simulator.start(ticks=options['ticks'])
        self.stdout.write(f"Simulating {len(simulator.items)} items on the {simulator.store.backend} store "
                          f"every {simulator.interval}s. Ctrl+C to stop.")
        try:
            simulator.join()
        except KeyboardInterrupt:
            pass
        finally:
            simulator.stop()
        for item in simulator.items:
            self.stdout.write(f"  {item['name']} @ {item['pharmacy']}: {item['stock']}")
        self.stdout.write(self.style.SUCCESS("Pharmacy simulation stopped."))
