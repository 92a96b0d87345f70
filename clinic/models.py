"""
Database models for the telehealth backend.

These models capture the four clinic entities: patients, their visit
records, appointments with doctors and the pharmacy inventory.  Field
names are snake_case here; the API layer exposes them in camelCase to
match the front-end.  Timestamps are stored as ISO-8601 strings so that
they round-trip exactly as the clients send and receive them.
"""
from __future__ import annotations

from django.conf import settings
from django.db import models


class Patient(models.Model):
    """A person registered at one of the village clinics."""
    GENDER_DEFAULT = 'other'

    name = models.CharField(max_length=255)
    gender = models.CharField(max_length=32, null=True, blank=True, default=GENDER_DEFAULT)
    age = models.PositiveIntegerField()
    village = models.CharField(max_length=255, db_index=True)
    phone = models.CharField(max_length=32, null=True, blank=True)
    created_at = models.CharField(max_length=40)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.name} ({self.village})"


class Record(models.Model):
    """A visit record: diagnosis plus optional notes and prescription.

    Deleting the patient deletes their records.
    """
    patient = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.CASCADE, related_name='records'
    )
    diagnosis = models.TextField()
    notes = models.TextField(null=True, blank=True)
    prescription = models.TextField(null=True, blank=True)
    created_at = models.CharField(max_length=40)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"Record {self.pk} for patient {self.patient_id}"


class Appointment(models.Model):
    """A consultation slot with a doctor.

    The patient link is optional and is cleared, not cascaded, when the
    patient is deleted.
    """
    STATUS_SCHEDULED = 'scheduled'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    patient = models.ForeignKey(
        Patient, null=True, blank=True, on_delete=models.SET_NULL, related_name='appointments'
    )
    doctor_name = models.CharField(max_length=255)
    scheduled_for = models.CharField(max_length=40, db_index=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED, null=True)
    created_at = models.CharField(max_length=40, db_index=True)

    def __str__(self) -> str:
        return f"{self.doctor_name} @ {self.scheduled_for} ({self.status})"


class InventoryItem(models.Model):
    """Stock of one medicine at one pharmacy."""
    medicine_name = models.CharField(max_length=255)
    pharmacy_name = models.CharField(max_length=255)
    stock = models.PositiveIntegerField(default=0)
    last_updated = models.CharField(max_length=40)

    class Meta:
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.medicine_name} @ {self.pharmacy_name}: {self.stock}"


class AuditEvent(models.Model):
    """Who changed which clinic entity, and when."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, related_name='audit_events'
    )
    action = models.CharField(max_length=32)
    object_type = models.CharField(max_length=32, null=True, blank=True)
    object_id = models.BigIntegerField(null=True, blank=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.action} {self.object_type}:{self.object_id} by {self.user_id}"
