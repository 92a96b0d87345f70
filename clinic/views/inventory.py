"""Pharmacy inventory endpoints (``/api/inventory``)."""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from clinic.permissions import ReadOnlyOrAuthenticated
from clinic.serializers.inventory import InventoryItemSerializer
from clinic.services import inventory as inventory_service
from clinic.services.audit import log_action
from clinic.services.common import ListParams, parse_id


@api_view(['GET', 'POST', 'PUT', 'DELETE'])
@permission_classes([ReadOnlyOrAuthenticated])
def inventory(request):
    if request.method == 'GET':
        pk = parse_id(request.query_params, 'Inventory', required=False)
        if pk is not None:
            return Response(InventoryItemSerializer(inventory_service.get_item(pk)).data)
        params = ListParams.from_query(request.query_params)
        return Response(InventoryItemSerializer(inventory_service.list_items(params), many=True).data)

    if request.method == 'POST':
        item = inventory_service.create_item(request.data)
        log_action(user=request.user, action='create', object_type='inventory', object_id=item.pk)
        return Response(InventoryItemSerializer(item).data, status=status.HTTP_201_CREATED)

    pk = parse_id(request.query_params, 'Inventory', required=True)
    if request.method == 'PUT':
        item = inventory_service.update_item(pk, request.data)
        log_action(user=request.user, action='update', object_type='inventory', object_id=pk,
                   detail={'stock': item.stock})
        return Response(InventoryItemSerializer(item).data)

    deleted = inventory_service.delete_item(pk)
    log_action(user=request.user, action='delete', object_type='inventory', object_id=pk)
    return Response({'message': 'Inventory item successfully deleted', 'item': deleted})
