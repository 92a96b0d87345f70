"""Visit records: a diagnosis written against an existing patient."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from clinic.exceptions import EntityNotFound, ValidationFailed
from clinic.models import Patient, Record
from clinic.serializers.record import RecordSerializer
from clinic.services.common import (
    UNSET,
    ChangeSet,
    ListParams,
    clean_text,
    ensure_body,
    in_db_range,
    now_iso,
    optional_text,
    paginate,
    parse_int,
    require_text,
    search,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('diagnosis', 'notes')


@dataclass
class RecordChanges(ChangeSet):
    patient_id: Any = UNSET
    diagnosis: Any = UNSET
    notes: Any = UNSET
    prescription: Any = UNSET


def ensure_patient_exists(patient_id: int) -> None:
    """A referenced patient that does not exist is a client error, not a 404."""
    if not in_db_range(patient_id) or not Patient.objects.filter(pk=patient_id).exists():
        raise ValidationFailed('PATIENT_NOT_FOUND', 'Patient not found')


def get_record(pk: int) -> Record:
    record = Record.objects.filter(pk=pk).first()
    if record is None:
        raise EntityNotFound('Record not found')
    return record


def list_records(params: ListParams) -> list[Record]:
    qs = search(Record.objects.order_by('id'), params.q, SEARCH_FIELDS)
    return paginate(qs, params)


def create_record(data) -> Record:
    data = ensure_body(data)
    patient_id = parse_int(data.get('patientId'))
    if not patient_id:
        raise ValidationFailed('MISSING_PATIENT_ID', 'Patient ID is required and must be a valid integer')
    diagnosis = require_text(data, 'diagnosis', 'MISSING_DIAGNOSIS',
                             'Diagnosis is required and must be a non-empty string')
    ensure_patient_exists(patient_id)

    record = Record.objects.create(
        patient_id=patient_id,
        diagnosis=diagnosis,
        notes=optional_text(data.get('notes')),
        prescription=optional_text(data.get('prescription')),
        created_at=now_iso(),
    )
    logger.info('Created record %s for patient %s', record.pk, patient_id)
    return record


def clean_record_changes(data) -> RecordChanges:
    data = ensure_body(data)
    changes = RecordChanges()
    if 'patientId' in data:
        changes.patient_id = parse_int(data['patientId'])
        if changes.patient_id is None:
            raise ValidationFailed('INVALID_PATIENT_ID', 'Patient ID must be a valid integer')
        ensure_patient_exists(changes.patient_id)
    if 'diagnosis' in data:
        changes.diagnosis = clean_text(data['diagnosis'])
        if changes.diagnosis is None:
            raise ValidationFailed('INVALID_DIAGNOSIS', 'Diagnosis must be a non-empty string')
    if 'notes' in data:
        changes.notes = optional_text(data['notes'])
    if 'prescription' in data:
        changes.prescription = optional_text(data['prescription'])
    if changes.is_empty():
        raise ValidationFailed('NO_UPDATES', 'No valid fields to update')
    return changes


def update_record(pk: int, data) -> Record:
    changes = clean_record_changes(data)
    record = get_record(pk)
    updated = changes.apply_to(record)
    record.save(update_fields=updated)
    logger.info('Updated record %s: %s', pk, ', '.join(updated))
    return record


def delete_record(pk: int) -> dict:
    record = get_record(pk)
    snapshot = RecordSerializer(record).data
    record.delete()
    logger.info('Deleted record %s', pk)
    return snapshot
