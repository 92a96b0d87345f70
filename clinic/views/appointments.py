"""
Appointment endpoints.

Besides the CRUD resource at ``/api/appointments`` the doctor portal can
download one day's schedule from ``/api/appointments/export``.
"""
from __future__ import annotations

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.permissions import ReadOnlyOrAuthenticated
from clinic.serializers.appointment import AppointmentExportQuerySerializer, AppointmentSerializer
from clinic.services import appointments as appointment_service
from clinic.services.audit import log_action
from clinic.services.common import ListParams, parse_id


@api_view(['GET', 'POST', 'PUT', 'DELETE'])
@permission_classes([ReadOnlyOrAuthenticated])
def appointments(request):
    if request.method == 'GET':
        pk = parse_id(request.query_params, 'Appointment', required=False)
        if pk is not None:
            return Response(AppointmentSerializer(appointment_service.get_appointment(pk)).data)
        params = ListParams.from_query(request.query_params)
        return Response(AppointmentSerializer(appointment_service.list_appointments(params), many=True).data)

    if request.method == 'POST':
        appointment = appointment_service.create_appointment(request.data)
        log_action(user=request.user, action='create', object_type='appointment', object_id=appointment.pk)
        return Response(AppointmentSerializer(appointment).data, status=status.HTTP_201_CREATED)

    pk = parse_id(request.query_params, 'Appointment', required=True)
    if request.method == 'PUT':
        appointment = appointment_service.update_appointment(pk, request.data)
        log_action(user=request.user, action='update', object_type='appointment', object_id=pk)
        return Response(AppointmentSerializer(appointment).data)

    deleted = appointment_service.delete_appointment(pk)
    log_action(user=request.user, action='delete', object_type='appointment', object_id=pk)
    return Response({'message': 'Appointment deleted successfully', 'appointment': deleted})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def export_appointments(request):
    """Download the appointments scheduled on ``?date=YYYY-MM-DD`` (default: today in UTC)."""
    q = AppointmentExportQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    day = q.validated_data.get('date') or timezone.now().date()
    data = AppointmentSerializer(appointment_service.appointments_on(day), many=True).data
    resp = Response(data)
    resp['Content-Disposition'] = f'attachment; filename="nabha-schedule-{day.isoformat()}.json"'
    return resp
