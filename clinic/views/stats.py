from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.services.stats import entity_counts


@api_view(['GET'])
@permission_classes([AllowAny])
def stats(request):
    """Row counts of the four clinic entities for the landing page."""
    return Response(entity_counts())
