"""
Patient registration and maintenance.

Deleting a patient removes their visit records (cascade) and detaches
their appointments, which keep existing with no patient.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from django.db import transaction

from clinic.exceptions import EntityNotFound, ValidationFailed
from clinic.models import Patient
from clinic.serializers.patient import PatientSerializer
from clinic.services.common import (
    UNSET,
    ChangeSet,
    ListParams,
    clean_text,
    ensure_body,
    now_iso,
    optional_text,
    paginate,
    parse_int,
    require_text,
    search,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('name', 'village', 'phone')
MAX_AGE = 120


@dataclass
class PatientChanges(ChangeSet):
    name: Any = UNSET
    age: Any = UNSET
    village: Any = UNSET
    gender: Any = UNSET
    phone: Any = UNSET


def _positive_age(value) -> Optional[int]:
    age = parse_int(value)
    return age if age is not None and 0 < age <= MAX_AGE else None


def get_patient(pk: int) -> Patient:
    patient = Patient.objects.filter(pk=pk).first()
    if patient is None:
        raise EntityNotFound('Patient not found')
    return patient


def list_patients(params: ListParams) -> list[Patient]:
    qs = search(Patient.objects.order_by('id'), params.q, SEARCH_FIELDS)
    return paginate(qs, params)


def create_patient(data) -> Patient:
    data = ensure_body(data)
    name = require_text(data, 'name', 'MISSING_REQUIRED_FIELD',
                        'Name is required and must be a non-empty string')
    village = require_text(data, 'village', 'MISSING_REQUIRED_FIELD',
                           'Village is required and must be a non-empty string')
    age = _positive_age(data.get('age'))
    if age is None:
        raise ValidationFailed('INVALID_AGE', 'Age is required and must be a positive integer up to 120')

    patient = Patient.objects.create(
        name=name,
        age=age,
        village=village,
        gender=optional_text(data.get('gender')) or Patient.GENDER_DEFAULT,
        phone=optional_text(data.get('phone')),
        created_at=now_iso(),
    )
    logger.info('Registered patient %s from %s', patient.pk, patient.village)
    return patient


def clean_patient_changes(data) -> PatientChanges:
    data = ensure_body(data)
    changes = PatientChanges()
    if 'name' in data:
        changes.name = clean_text(data['name'])
        if changes.name is None:
            raise ValidationFailed('INVALID_NAME', 'Name must be a non-empty string')
    if 'age' in data:
        changes.age = _positive_age(data['age'])
        if changes.age is None:
            raise ValidationFailed('INVALID_AGE', 'Age must be a positive integer up to 120')
    if 'village' in data:
        changes.village = clean_text(data['village'])
        if changes.village is None:
            raise ValidationFailed('INVALID_VILLAGE', 'Village must be a non-empty string')
    if 'gender' in data:
        changes.gender = optional_text(data['gender']) or Patient.GENDER_DEFAULT
    if 'phone' in data:
        changes.phone = optional_text(data['phone'])
    if changes.is_empty():
        raise ValidationFailed('NO_UPDATES', 'No valid fields to update')
    return changes


def update_patient(pk: int, data) -> Patient:
    changes = clean_patient_changes(data)
    patient = get_patient(pk)
    updated = changes.apply_to(patient)
    patient.save(update_fields=updated)
    logger.info('Updated patient %s: %s', pk, ', '.join(updated))
    return patient


@transaction.atomic
def delete_patient(pk: int) -> dict:
    patient = get_patient(pk)
    snapshot = PatientSerializer(patient).data
    records = patient.records.count()
    patient.delete()
    logger.info('Deleted patient %s (%s records removed)', pk, records)
    return snapshot
