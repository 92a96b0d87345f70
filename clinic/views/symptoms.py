from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from clinic.serializers.symptoms import SymptomCheckSerializer
from clinic.services.symptoms import suggest


@api_view(['POST'])
@permission_classes([AllowAny])
def check_symptoms(request):
    s = SymptomCheckSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    return Response({'suggestions': suggest(s.validated_data['symptoms'])})
