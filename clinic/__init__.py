"""Clinic application for the telehealth backend.

This package contains models, services, serializers, views and route
registrations implementing the clinic API used by the front‑end.
"""
