#!/usr/bin/env python
"""
Command line entry point for the Nabha telehealth backend.

Besides Django's built-in commands this exposes ``seed_demo_data`` and
``simulate_pharmacy`` from the clinic app.
"""
import os
import sys


def main() -> None:
    """Run administrative tasks with ``telehealth.settings``."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'telehealth.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
