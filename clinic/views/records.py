"""Visit record endpoints (``/api/records``)."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from clinic.permissions import ReadOnlyOrAuthenticated
from clinic.serializers.record import RecordSerializer
from clinic.services import records as record_service
from clinic.services.audit import log_action
from clinic.services.common import ListParams, parse_id


@api_view(['GET', 'POST', 'PUT', 'DELETE'])
@permission_classes([ReadOnlyOrAuthenticated])
def records(request):
    if request.method == 'GET':
        pk = parse_id(request.query_params, 'Record', required=False)
        if pk is not None:
            return Response(RecordSerializer(record_service.get_record(pk)).data)
        params = ListParams.from_query(request.query_params)
        return Response(RecordSerializer(record_service.list_records(params), many=True).data)

    if request.method == 'POST':
        record = record_service.create_record(request.data)
        log_action(user=request.user, action='create', object_type='record', object_id=record.pk,
                   detail={'patientId': record.patient_id})
        return Response(RecordSerializer(record).data, status=status.HTTP_201_CREATED)

    pk = parse_id(request.query_params, 'Record', required=True)
    if request.method == 'PUT':
        record = record_service.update_record(pk, request.data)
        log_action(user=request.user, action='update', object_type='record', object_id=pk)
        return Response(RecordSerializer(record).data)

    deleted = record_service.delete_record(pk)
    log_action(user=request.user, action='delete', object_type='record', object_id=pk)
    return Response({'message': 'Record successfully deleted', 'record': deleted})
