from django.http import HttpResponse
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.clients.services import ClientNotFoundError
from apps.premium.services import QuotaExceededError, PremiumTemplateError

from .serializers import (
    DevisSerializer,
    DevisListSerializer,
    DevisInputSerializer,
    QuoteFilterSerializer,
    QuoteStatusSerializer,
    ShareEmailSerializer,
    WhatsAppShareSerializer,
    QuoteNumberSerializer,
    DashboardStatsSerializer,
)
from .services import (
    get_user_quotes,
    get_quote,
    create_quote,
    update_quote,
    change_quote_status,
    delete_quote,
    duplicate_quote,
    generate_quote_number,
    get_dashboard_stats,
    render_quote_pdf,
    pdf_filename,
    share_quote_by_email,
    whatsapp_share_url,
    QuoteNotFoundError,
    InvalidQuoteDataError,
    QuoteNumberConflictError,
    QuoteShareError,
)


class QuotePagination(PageNumberPagination):
    """Custom pagination for quotes."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _input_kwargs(validated_data):
    """Map validated quote input onto service keyword arguments."""
    data = dict(validated_data)
    if 'client' in data:
        data['client_data'] = dict(data.pop('client'))
    if 'items' in data:
        data['items'] = [dict(item) for item in data['items']]
    return data


class QuoteViewSet(viewsets.ModelViewSet):
    """
    Quotes of the authenticated user.

    list: Filtered listing (?search=, ?status=, ?date_range=, ?ordering=)
    create: Create a quote with its lines (counts against the quota)
    retrieve: Quote with client and lines
    update / partial_update: Edit header and optionally replace lines
    destroy: Delete a quote
    """

    permission_classes = [IsAuthenticated]
    pagination_class = QuotePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        if self.action != 'list':
            return get_user_quotes(user=self.request.user).prefetch_related('articles')

        filters = QuoteFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return get_user_quotes(
            user=self.request.user,
            search=filters.validated_data.get('search'),
            status=filters.validated_data.get('status'),
            date_range=filters.validated_data.get('date_range'),
            ordering=filters.validated_data.get('ordering'),
        )

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return DevisInputSerializer
        if self.action == 'list':
            return DevisListSerializer
        return DevisSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(name='search', type=str, description='Match on number, client name or company'),
            OpenApiParameter(name='status', type=str, description='draft, sent, pending, accepted or rejected'),
            OpenApiParameter(name='date_range', type=str, description='all, today, week, month or quarter'),
            OpenApiParameter(name='ordering', type=str, description='Sort field, prefix with - for descending'),
        ],
        responses={200: DevisListSerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=DevisInputSerializer, responses={201: DevisSerializer})
    def create(self, request, *args, **kwargs):
        serializer = DevisInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            devis = create_quote(user=request.user, **_input_kwargs(serializer.validated_data))
        except (QuotaExceededError, PremiumTemplateError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except ClientNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidQuoteDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except QuoteNumberConflictError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        devis = get_quote(quote_id=devis.id, user=request.user)
        return Response(DevisSerializer(devis).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=DevisInputSerializer, responses={200: DevisSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = DevisInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            devis = update_quote(
                quote_id=self.kwargs['pk'],
                user=request.user,
                **_input_kwargs(serializer.validated_data)
            )
        except (QuoteNotFoundError, ClientNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except PremiumTemplateError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidQuoteDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        devis = get_quote(quote_id=devis.id, user=request.user)
        return Response(DevisSerializer(devis).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_quote(quote_id=self.kwargs['pk'], user=request.user)
        except QuoteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={201: DevisSerializer})
    @action(detail=True, methods=['post'])
    def duplicate(self, request, pk=None):
        """Copy the quote as a new draft."""
        try:
            devis = duplicate_quote(quote_id=pk, user=request.user)
        except QuoteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (QuotaExceededError, PremiumTemplateError) as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidQuoteDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except QuoteNumberConflictError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        devis = get_quote(quote_id=devis.id, user=request.user)
        return Response(DevisSerializer(devis).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=QuoteStatusSerializer, responses={200: DevisSerializer})
    @action(detail=True, methods=['post'], url_path='status')
    def change_status(self, request, pk=None):
        serializer = QuoteStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            change_quote_status(
                quote_id=pk,
                user=request.user,
                status=serializer.validated_data['status'],
            )
        except QuoteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        devis = get_quote(quote_id=pk, user=request.user)
        return Response(DevisSerializer(devis).data)

    @extend_schema(responses={(200, 'application/pdf'): bytes})
    @action(detail=True, methods=['get'])
    def pdf(self, request, pk=None):
        """Download the quote as PDF."""
        try:
            devis = get_quote(quote_id=pk, user=request.user)
        except QuoteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        response = HttpResponse(render_quote_pdf(devis), content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="{pdf_filename(devis)}"'
        return response

    @extend_schema(request=ShareEmailSerializer, responses={200: DevisSerializer})
    @action(detail=True, methods=['post'], url_path='share/email')
    def share_email(self, request, pk=None):
        """Email the quote PDF to the client or to ``recipient``."""
        serializer = ShareEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            devis = share_quote_by_email(quote_id=pk, user=request.user, **serializer.validated_data)
        except QuoteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidQuoteDataError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except QuoteShareError as e:
            return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(DevisSerializer(devis).data)

    @extend_schema(responses={200: WhatsAppShareSerializer})
    @action(detail=True, methods=['get'], url_path='share/whatsapp')
    def share_whatsapp(self, request, pk=None):
        try:
            devis = get_quote(quote_id=pk, user=request.user)
        except QuoteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'url': whatsapp_share_url(devis)})

    @extend_schema(responses={200: QuoteNumberSerializer})
    @action(detail=False, methods=['get'], url_path='next-number')
    def next_number(self, request):
        """Number the next quote would get."""
        return Response({'quote_number': generate_quote_number(user=request.user)})

    @extend_schema(responses={200: DashboardStatsSerializer})
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Dashboard figures."""
        data = get_dashboard_stats(user=request.user)
        return Response(DashboardStatsSerializer(data).data)
