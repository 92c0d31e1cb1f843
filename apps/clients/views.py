from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import ClientSerializer, ClientInputSerializer
from .services import (
    get_user_clients,
    create_client,
    update_client,
    delete_client,
    ClientNotFoundError,
)


class ClientPagination(PageNumberPagination):
    """Custom pagination for clients."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ClientViewSet(viewsets.ModelViewSet):
    """
    Client CRUD, always scoped to the authenticated user.

    list: Get the user's clients (optional ?search=)
    create: Create a client
    retrieve: Get a client
    update / partial_update: Edit a client
    destroy: Delete a client
    """

    serializer_class = ClientSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ClientPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        return get_user_clients(
            user=self.request.user,
            search=self.request.query_params.get('search'),
        )

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return ClientInputSerializer
        return ClientSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter(name='search', type=str, description='Match on name, company or email'),
        ],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=ClientInputSerializer, responses={201: ClientSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ClientInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        client = create_client(user=request.user, **serializer.validated_data)
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ClientInputSerializer, responses={200: ClientSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = ClientInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            client = update_client(
                client_id=self.kwargs['pk'],
                user=request.user,
                **serializer.validated_data
            )
        except ClientNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ClientSerializer(client).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_client(client_id=self.kwargs['pk'], user=request.user)
        except ClientNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
