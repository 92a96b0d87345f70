"""
URL mappings for the telehealth API.

Each clinic entity is a single resource path; the record to act on is
chosen with ``?id=`` rather than a path segment, matching the front-end.
Trailing slashes are deliberately omitted.
"""
from django.urls import path, include

from .auth_views import login_view, logout_view
from .views import health
from .views.appointments import appointments, export_appointments
from .views.inventory import inventory
from .views.patients import patients
from .views.records import records
from .views.stats import stats
from .views.symptoms import check_symptoms


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/logout', logout_view, name='logout_view'),
    # Clinic entities
    path('api/patients', patients, name='patients'),
    path('api/records', records, name='records'),
    path('api/appointments', appointments, name='appointments'),
    path('api/appointments/export', export_appointments, name='appointments_export'),
    path('api/inventory', inventory, name='inventory'),
    # Aggregates and tools
    path('api/stats', stats, name='stats'),
    path('api/symptoms/check', check_symptoms, name='symptoms_check'),
]
