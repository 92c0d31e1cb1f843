from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import ProfileSerializer, ProfileInputSerializer
from .services import (
    get_or_create_profile,
    create_profile,
    update_profile,
    ProfileAlreadyExistsError,
    UnsupportedCurrencyError,
)


@extend_schema(
    methods=['GET'],
    responses={200: ProfileSerializer},
    description="Get the company profile of the current user (created empty on first access).",
    tags=['profile'],
)
@extend_schema(
    methods=['POST'],
    request=ProfileInputSerializer,
    responses={201: ProfileSerializer},
    description="Create the company profile of the current user.",
    tags=['profile'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=ProfileInputSerializer,
    responses={200: ProfileSerializer},
    description="Update the company profile of the current user.",
    tags=['profile'],
)
@api_view(['GET', 'POST', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def my_profile(request):
    """Company profile of the authenticated user."""
    if request.method == 'GET':
        profile = get_or_create_profile(user=request.user)
        return Response(ProfileSerializer(profile).data)

    serializer = ProfileInputSerializer(data=request.data, partial=request.method != 'POST')
    serializer.is_valid(raise_exception=True)

    try:
        if request.method == 'POST':
            profile = create_profile(user=request.user, **serializer.validated_data)
            return Response(ProfileSerializer(profile).data, status=status.HTTP_201_CREATED)

        profile = update_profile(user=request.user, **serializer.validated_data)
    except ProfileAlreadyExistsError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except UnsupportedCurrencyError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ProfileSerializer(profile).data)
