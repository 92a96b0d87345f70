"""Liveness probe: database round trip plus the active local store backend."""
from django.db import DatabaseError, connections
from django.http import JsonResponse

from clinic.services.local_store import StoreError, get_store


def healthz(request):
    payload = {'ok': True}
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
        payload['db'] = bool(row and row[0] == 1)
    except DatabaseError as e:
        return JsonResponse({'ok': False, 'error': str(e)}, status=500)
    try:
        payload['localStore'] = get_store().backend
    except (StoreError, OSError) as e:
        payload['localStore'] = None
        payload['localStoreError'] = str(e)
    return JsonResponse(payload)
