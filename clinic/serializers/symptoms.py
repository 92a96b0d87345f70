from rest_framework import serializers


class SymptomCheckSerializer(serializers.Serializer):
    symptoms = serializers.CharField(max_length=2000, allow_blank=True, trim_whitespace=True)
