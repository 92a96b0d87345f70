from rest_framework import serializers

from clinic.models import InventoryItem


class InventoryItemSerializer(serializers.ModelSerializer):
    medicineName = serializers.CharField(source='medicine_name', read_only=True)
    pharmacyName = serializers.CharField(source='pharmacy_name', read_only=True)
    lastUpdated = serializers.CharField(source='last_updated', read_only=True)

    class Meta:
        model = InventoryItem
        fields = ['id', 'medicineName', 'pharmacyName', 'stock', 'lastUpdated']
        read_only_fields = fields
