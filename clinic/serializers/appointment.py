from rest_framework import serializers

from clinic.models import Appointment


class AppointmentSerializer(serializers.ModelSerializer):
    patientId = serializers.ReadOnlyField(source='patient_id')
    doctorName = serializers.CharField(source='doctor_name', read_only=True)
    scheduledFor = serializers.CharField(source='scheduled_for', read_only=True)
    createdAt = serializers.CharField(source='created_at', read_only=True)

    class Meta:
        model = Appointment
        fields = ['id', 'patientId', 'doctorName', 'scheduledFor', 'status', 'createdAt']
        read_only_fields = fields


class AppointmentExportQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False, input_formats=['%Y-%m-%d'])
