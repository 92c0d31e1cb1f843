from django.http import HttpResponse
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import ActivationCode
from .permissions import IsSolvixAdmin
from .serializers import (
    ActivationCodeSerializer,
    ActivationCodeFilterSerializer,
    GenerateCodesSerializer,
    SellCodeSerializer,
    RevokeCodeSerializer,
    ActivateCodeSerializer,
    PremiumStatusSerializer,
    QuotaInfoSerializer,
    BlockStatusSerializer,
    CodeStatsSerializer,
)
from .services import (
    generate_activation_codes,
    mark_code_as_sold,
    activate_premium_code,
    revoke_activation_code,
    get_activation_code_stats,
    list_activation_codes,
    export_activation_codes_csv,
    get_premium_status,
    get_user_quota_info,
    get_block_status,
    fingerprint_from_request,
    # Exceptions
    InsufficientPermissionsError,
    InvalidCodeFormatError,
    CodeNotFoundError,
    InvalidCodeTransitionError,
    CustomerContactRequiredError,
    InvalidActivationCodeError,
    ActivationBlockedError,
    AlreadyPremiumError,
)


class ActivationCodePagination(PageNumberPagination):
    """Custom pagination for activation codes."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


# =============================================================================
# User endpoints
# =============================================================================

@extend_schema(
    request=ActivateCodeSerializer,
    responses={
        200: PremiumStatusSerializer,
        400: None,
        409: None,
        429: None,
    },
    description="Activate premium with a SOLVIX-XXXXXXXX code bound to the calling device.",
    tags=['premium'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def activate(request):
    """Activate premium."""
    serializer = ActivateCodeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    fingerprint = fingerprint_from_request(request, serializer.validated_data.get('device'))

    try:
        activate_premium_code(
            user=request.user,
            code=serializer.validated_data['code'],
            device_fingerprint=fingerprint,
        )
    except InvalidCodeFormatError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except ActivationBlockedError as e:
        return Response(
            {'error': str(e), 'remaining_hours': e.remaining_hours},
            status=status.HTTP_429_TOO_MANY_REQUESTS
        )
    except InvalidActivationCodeError as e:
        return Response(
            {'error': str(e), 'remaining_attempts': e.remaining_attempts},
            status=status.HTTP_400_BAD_REQUEST
        )
    except AlreadyPremiumError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    premium_status = get_premium_status(user=request.user, device_fingerprint=fingerprint)
    return Response(PremiumStatusSerializer(premium_status).data)


@extend_schema(
    responses={200: PremiumStatusSerializer},
    description="Premium status of the current user, checked against the calling device.",
    tags=['premium'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def premium_status(request):
    hints = {
        key: request.query_params[key]
        for key in ('user_agent', 'screen_width', 'screen_height', 'language', 'timezone')
        if key in request.query_params
    }
    fingerprint = fingerprint_from_request(request, hints)
    data = get_premium_status(user=request.user, device_fingerprint=fingerprint)
    return Response(PremiumStatusSerializer(data).data)


@extend_schema(
    responses={200: QuotaInfoSerializer},
    description="Monthly quote quota of the current user.",
    tags=['premium'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def quota(request):
    return Response(QuotaInfoSerializer(get_user_quota_info(user=request.user)).data)


@extend_schema(
    responses={200: BlockStatusSerializer},
    description="Activation lockout state of the current user.",
    tags=['premium'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def activation_lockout(request):
    return Response(BlockStatusSerializer(get_block_status(user=request.user)).data)


# =============================================================================
# Admin endpoints
# =============================================================================

class ActivationCodeViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Activation code administration.

    list: Codes filtered by ?search=, ?status=, sorted by ?sort_by= and ?direction=
    retrieve: One code, looked up by its value
    generate: Create a batch of codes
    sell: Mark an AVAILABLE code as SOLD
    revoke: Revoke a code
    stats: Counts per status
    export: CSV download
    """

    serializer_class = ActivationCodeSerializer
    permission_classes = [IsAuthenticated, IsSolvixAdmin]
    pagination_class = ActivationCodePagination
    lookup_field = 'code'
    lookup_value_regex = '[^/]+'

    def get_queryset(self):
        if self.action not in ('list', 'export'):
            return ActivationCode.objects.select_related('created_by', 'activated_by')

        filters = ActivationCodeFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_activation_codes(**filters.validated_data)

    def get_object(self):
        lookup = self.kwargs[self.lookup_field].strip().upper()
        self.kwargs[self.lookup_field] = lookup
        return super().get_object()

    @extend_schema(
        parameters=[
            OpenApiParameter(name='search', type=str, description='Match on code or customer contact'),
            OpenApiParameter(name='status', type=str, description='AVAILABLE, SOLD, USED or REVOKED'),
            OpenApiParameter(name='sort_by', type=str, description='date, status or code'),
            OpenApiParameter(name='direction', type=str, description='asc or desc'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=GenerateCodesSerializer, responses={201: ActivationCodeSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def generate(self, request):
        """Generate a batch of AVAILABLE codes."""
        serializer = GenerateCodesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            codes = generate_activation_codes(
                count=serializer.validated_data['count'],
                created_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(
            ActivationCodeSerializer(codes, many=True).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(request=SellCodeSerializer, responses={200: ActivationCodeSerializer})
    @action(detail=True, methods=['post'])
    def sell(self, request, code=None):
        """Mark a code as sold to a customer."""
        serializer = SellCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            activation = mark_code_as_sold(code=code, sold_by=request.user, **serializer.validated_data)
        except CodeNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidCodeTransitionError, CustomerContactRequiredError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(ActivationCodeSerializer(activation).data)

    @extend_schema(request=RevokeCodeSerializer, responses={200: ActivationCodeSerializer})
    @action(detail=True, methods=['post'])
    def revoke(self, request, code=None):
        """Revoke a code."""
        serializer = RevokeCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            activation = revoke_activation_code(
                code=code,
                revoked_by=request.user,
                reason=serializer.validated_data['reason'],
            )
        except CodeNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidCodeTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(ActivationCodeSerializer(activation).data)

    @extend_schema(responses={200: CodeStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Counts per status."""
        return Response(CodeStatsSerializer(get_activation_code_stats()).data)

    @extend_schema(parameters=[
        OpenApiParameter(name='search', type=str),
        OpenApiParameter(name='status', type=str),
    ], responses={(200, 'text/csv'): str})
    @action(detail=False, methods=['get'])
    def export(self, request):
        """Download the (filtered) codes as CSV."""
        content = export_activation_codes_csv(codes=self.get_queryset())
        filename = f"solvix-codes-{timezone.localdate().isoformat()}.csv"

        response = HttpResponse(content, content_type='text/csv; charset=utf-8')
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response
