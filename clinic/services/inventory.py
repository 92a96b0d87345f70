"""Pharmacy inventory: stock levels per medicine and pharmacy."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from clinic.exceptions import EntityNotFound, ValidationFailed
from clinic.models import InventoryItem
from clinic.serializers.inventory import InventoryItemSerializer
from clinic.services.common import (
    UNSET,
    ChangeSet,
    ListParams,
    clean_text,
    ensure_body,
    now_iso,
    paginate,
    parse_int,
    require_text,
    search,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ('medicine_name', 'pharmacy_name')
# PositiveIntegerField upper bound
MAX_STOCK = 2147483647


@dataclass
class InventoryChanges(ChangeSet):
    medicine_name: Any = UNSET
    pharmacy_name: Any = UNSET
    stock: Any = UNSET


def _stock(value) -> int:
    stock: Optional[int] = parse_int(value)
    if stock is None or not 0 <= stock <= MAX_STOCK:
        raise ValidationFailed('INVALID_STOCK', 'Stock must be a non-negative integer')
    return stock


def get_item(pk: int) -> InventoryItem:
    item = InventoryItem.objects.filter(pk=pk).first()
    if item is None:
        raise EntityNotFound('Inventory item not found')
    return item


def list_items(params: ListParams) -> list[InventoryItem]:
    qs = search(InventoryItem.objects.order_by('id'), params.q, SEARCH_FIELDS)
    return paginate(qs, params)


def create_item(data) -> InventoryItem:
    data = ensure_body(data)
    medicine_name = require_text(data, 'medicineName', 'MISSING_REQUIRED_FIELD',
                                 'Medicine name is required and must be a non-empty string')
    pharmacy_name = require_text(data, 'pharmacyName', 'MISSING_REQUIRED_FIELD',
                                 'Pharmacy name is required and must be a non-empty string')
    stock = _stock(data['stock']) if 'stock' in data else 0

    item = InventoryItem.objects.create(
        medicine_name=medicine_name,
        pharmacy_name=pharmacy_name,
        stock=stock,
        last_updated=now_iso(),
    )
    logger.info('Added %s at %s (stock %s)', medicine_name, pharmacy_name, stock)
    return item


def clean_item_changes(data) -> InventoryChanges:
    data = ensure_body(data)
    changes = InventoryChanges()
    if 'medicineName' in data:
        changes.medicine_name = clean_text(data['medicineName'])
        if changes.medicine_name is None:
            raise ValidationFailed('INVALID_MEDICINE_NAME', 'Medicine name must be a non-empty string')
    if 'pharmacyName' in data:
        changes.pharmacy_name = clean_text(data['pharmacyName'])
        if changes.pharmacy_name is None:
            raise ValidationFailed('INVALID_PHARMACY_NAME', 'Pharmacy name must be a non-empty string')
    if 'stock' in data:
        changes.stock = _stock(data['stock'])
    if changes.is_empty():
        raise ValidationFailed('NO_UPDATES', 'No valid fields to update')
    return changes


def update_item(pk: int, data) -> InventoryItem:
    changes = clean_item_changes(data)
    item = get_item(pk)
    updated = changes.apply_to(item)
    item.last_updated = now_iso()
    item.save(update_fields=updated + ['last_updated'])
    logger.info('Updated inventory item %s: %s', pk, ', '.join(updated))
    return item


def delete_item(pk: int) -> dict:
    item = get_item(pk)
    snapshot = InventoryItemSerializer(item).data
    item.delete()
    logger.info('Deleted inventory item %s', pk)
    return snapshot
