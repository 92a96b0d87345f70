from rest_framework import serializers

from clinic.models import Record


class RecordSerializer(serializers.ModelSerializer):
    patientId = serializers.ReadOnlyField(source='patient_id')
    createdAt = serializers.CharField(source='created_at', read_only=True)

    class Meta:
        model = Record
        fields = ['id', 'patientId', 'diagnosis', 'notes', 'prescription', 'createdAt']
        read_only_fields = fields
