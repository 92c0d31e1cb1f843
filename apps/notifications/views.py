from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import NotificationPreferencesSerializer
from .services import get_notification_preferences, update_notification_preferences


@extend_schema(
    methods=['GET'],
    responses={200: NotificationPreferencesSerializer},
    description="Email notification preferences of the current user.",
    tags=['notifications'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=NotificationPreferencesSerializer,
    responses={200: NotificationPreferencesSerializer},
    description="Update email notification preferences.",
    tags=['notifications'],
)
@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def preferences(request):
    if request.method == 'GET':
        prefs = get_notification_preferences(user=request.user)
        return Response(NotificationPreferencesSerializer(prefs).data)

    serializer = NotificationPreferencesSerializer(data=request.data, partial=True)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    prefs = update_notification_preferences(user=request.user, **serializer.validated_data)
    return Response(NotificationPreferencesSerializer(prefs).data)
