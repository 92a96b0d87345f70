"""
Appointment scheduling.

``scheduledFor`` is kept exactly as the client sent it once it parses as
an ISO-8601 date or timestamp.  The patient link is optional; sending
``patientId: null`` on update detaches the appointment.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from clinic.exceptions import EntityNotFound, ValidationFailed
from clinic.models import Appointment
from clinic.serializers.appointment import AppointmentSerializer
from clinic.services.common import (
    UNSET,
    ChangeSet,
    ListParams,
    clean_text,
    ensure_body,
    is_iso_timestamp,
    now_iso,
    paginate,
    parse_int,
    search,
)
from clinic.services.records import ensure_patient_exists

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('doctor_name',)
VALID_STATUSES = [choice for choice, _ in Appointment.STATUS_CHOICES]


@dataclass
class AppointmentChanges(ChangeSet):
    patient_id: Any = UNSET
    doctor_name: Any = UNSET
    scheduled_for: Any = UNSET
    status: Any = UNSET


def _doctor_name(value, message: str) -> str:
    name = clean_text(value)
    if name is None:
        raise ValidationFailed('INVALID_DOCTOR_NAME', message)
    return name


def _scheduled_for(value) -> str:
    if not is_iso_timestamp(value):
        raise ValidationFailed('INVALID_TIMESTAMP', 'scheduledFor must be a valid ISO timestamp')
    return value.strip()


def _status(value) -> str:
    if value not in VALID_STATUSES:
        raise ValidationFailed('INVALID_STATUS', f"Status must be one of: {', '.join(VALID_STATUSES)}")
    return value


def _patient_ref(value) -> Optional[int]:
    if value is None:
        return None
    patient_id = parse_int(value)
    if patient_id is None:
        raise ValidationFailed('INVALID_PATIENT_ID', 'patientId must be a valid number')
    ensure_patient_exists(patient_id)
    return patient_id


def get_appointment(pk: int) -> Appointment:
    appointment = Appointment.objects.filter(pk=pk).first()
    if appointment is None:
        raise EntityNotFound('Appointment not found')
    return appointment


def list_appointments(params: ListParams) -> list[Appointment]:
    qs = search(Appointment.objects.order_by('-created_at', '-id'), params.q, SEARCH_FIELDS)
    return paginate(qs, params)


def appointments_on(day: date) -> list[Appointment]:
    """Appointments whose ``scheduledFor`` falls on ``day`` (UTC date prefix)."""
    return list(
        Appointment.objects.filter(scheduled_for__startswith=day.isoformat()).order_by('scheduled_for', 'id')
    )


def create_appointment(data) -> Appointment:
    data = ensure_body(data)
    doctor_name = _doctor_name(data.get('doctorName'),
                               'doctorName is required and must be a non-empty string')
    scheduled_for = data.get('scheduledFor')
    if not scheduled_for:
        raise ValidationFailed('MISSING_SCHEDULED_FOR', 'scheduledFor is required')
    scheduled_for = _scheduled_for(scheduled_for)
    status = _status(data.get('status', Appointment.STATUS_SCHEDULED))
    patient_id = _patient_ref(data.get('patientId'))

    appointment = Appointment.objects.create(
        patient_id=patient_id,
        doctor_name=doctor_name,
        scheduled_for=scheduled_for,
        status=status,
        created_at=now_iso(),
    )
    logger.info('Booked appointment %s with %s at %s', appointment.pk, doctor_name, scheduled_for)
    return appointment


def clean_appointment_changes(data) -> AppointmentChanges:
    data = ensure_body(data)
    changes = AppointmentChanges()
    if 'patientId' in data:
        changes.patient_id = _patient_ref(data['patientId'])
    if 'doctorName' in data:
        changes.doctor_name = _doctor_name(data['doctorName'], 'doctorName must be a non-empty string')
    if 'scheduledFor' in data:
        if not data['scheduledFor']:
            raise ValidationFailed('EMPTY_SCHEDULED_FOR', 'scheduledFor cannot be empty')
        changes.scheduled_for = _scheduled_for(data['scheduledFor'])
    if 'status' in data:
        changes.status = _status(data['status'])
    if changes.is_empty():
        raise ValidationFailed('NO_UPDATES', 'No valid fields to update')
    return changes


def update_appointment(pk: int, data) -> Appointment:
    changes = clean_appointment_changes(data)
    appointment = get_appointment(pk)
    updated = changes.apply_to(appointment)
    appointment.save(update_fields=updated)
    logger.info('Updated appointment %s: %s', pk, ', '.join(updated))
    return appointment


def delete_appointment(pk: int) -> dict:
    appointment = get_appointment(pk)
    snapshot = AppointmentSerializer(appointment).data
    appointment.delete()
    logger.info('Deleted appointment %s', pk)
    return snapshot
