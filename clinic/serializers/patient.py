from rest_framework import serializers

from clinic.models import Patient


class PatientSerializer(serializers.ModelSerializer):
    createdAt = serializers.CharField(source='created_at', read_only=True)

    class Meta:
        model = Patient
        fields = ['id', 'name', 'gender', 'age', 'village', 'phone', 'createdAt']
        read_only_fields = fields
