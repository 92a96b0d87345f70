"""
Permission classes for the clinic API.

Reads are public; anything that changes data needs an authenticated
principal resolved from the bearer token.
"""
from rest_framework.permissions import BasePermission, IsAuthenticated, SAFE_METHODS


class ReadOnly(BasePermission):
    """Allow read‑only access (GET, HEAD, OPTIONS)."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return request.method in SAFE_METHODS


# Public reads, authenticated writes.
ReadOnlyOrAuthenticated = ReadOnly | IsAuthenticated
