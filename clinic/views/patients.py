"""
Patient endpoints.

``/api/patients`` serves the whole resource: ``GET`` reads one patient
(``?id=``) or a page of them (``?page=&limit=&q=``), ``POST`` registers,
``PUT ?id=`` applies a partial update and ``DELETE ?id=`` removes the
patient together with their records.  Writes need a bearer token.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from clinic.permissions import ReadOnlyOrAuthenticated
from clinic.serializers.patient import PatientSerializer
from clinic.services import patients as patient_service
from clinic.services.audit import log_action
from clinic.services.common import ListParams, parse_id


@api_view(['GET', 'POST', 'PUT', 'DELETE'])
@permission_classes([ReadOnlyOrAuthenticated])
def patients(request):
    if request.method == 'GET':
        pk = parse_id(request.query_params, 'Patient', required=False)
        if pk is not None:
            return Response(PatientSerializer(patient_service.get_patient(pk)).data)
        params = ListParams.from_query(request.query_params)
        return Response(PatientSerializer(patient_service.list_patients(params), many=True).data)

    if request.method == 'POST':
        patient = patient_service.create_patient(request.data)
        log_action(user=request.user, action='create', object_type='patient', object_id=patient.pk)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    pk = parse_id(request.query_params, 'Patient', required=True)
    if request.method == 'PUT':
        patient = patient_service.update_patient(pk, request.data)
        log_action(user=request.user, action='update', object_type='patient', object_id=pk)
        return Response(PatientSerializer(patient).data)

    deleted = patient_service.delete_patient(pk)
    log_action(user=request.user, action='delete', object_type='patient', object_id=pk)
    return Response({'message': 'Patient successfully deleted', 'patient': deleted})
