from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from .permissions import IsAdminRole
from .serializers import (
    StoreSerializer,
    StoreListSerializer,
    StoreCreateSerializer,
    StoreFilterSerializer,
)
from .services import (
    search_stores,
    create_store,
    update_store,
    deactivate_store,
    reactivate_store,
    delete_global_store,
    StoreNotFoundError,
    DuplicateStoreError,
    StorePermissionError,
    InvalidStoreStateError,
)


class StorePagination(PageNumberPagination):
    """Custom pagination for stores."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error_response(error):
    """Map a store service error to an HTTP response."""
    if isinstance(error, StoreNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, StorePermissionError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(error, (DuplicateStoreError, InvalidStoreStateError)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


class StoreViewSet(viewsets.ModelViewSet):
    """
    ViewSet for stores.

    list: Stores available to the user (global + own), with filters
    create: Create a store owned by the user
    retrieve: Get a store, including own inactive stores
    update / partial_update: Update own store
    destroy: Deactivate own store
    """

    serializer_class = StoreSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = StorePagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        """
        Filter stores based on query parameters.

        Filters:
        - store_type, city, country: exact (case-insensitive for places)
        - name_contains, location_contains: substring search
        - has_website: true/false
        - is_active: true (default) / false
        """
        if self.action != 'list':
            return search_stores(user=self.request.user, is_active=None)

        filters = StoreFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return search_stores(user=self.request.user, **filters.validated_data)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return StoreListSerializer
        elif self.action in ('create', 'update', 'partial_update'):
            return StoreCreateSerializer
        return StoreSerializer

    @extend_schema(parameters=[StoreFilterSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        """Create a new store."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store = create_store(owner=request.user, **serializer.validated_data)
        except DuplicateStoreError as e:
            return _error_response(e)

        return Response(StoreSerializer(store).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update own store (PUT and PATCH)."""
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            store = update_store(
                store_id=kwargs.get('pk'),
                user=request.user,
                data=serializer.validated_data
            )
        except (StoreNotFoundError, StorePermissionError, DuplicateStoreError) as e:
            return _error_response(e)

        return Response(StoreSerializer(store).data)

    def destroy(self, request, *args, **kwargs):
        """Soft delete own store."""
        try:
            deactivate_store(store_id=kwargs.get('pk'), user=request.user)
        except (StoreNotFoundError, StorePermissionError, InvalidStoreStateError) as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=None, responses={200: StoreSerializer})
    @action(detail=True, methods=['post'])
    def reactivate(self, request, pk=None):
        """Reactivate own store."""
        try:
            store = reactivate_store(store_id=pk, user=request.user)
        except (StoreNotFoundError, StorePermissionError,
                InvalidStoreStateError, DuplicateStoreError) as e:
            return _error_response(e)

        return Response(StoreSerializer(store).data)

    @extend_schema(request=None, responses={204: None})
    @action(detail=True, methods=['delete'], permission_classes=[IsAuthenticated, IsAdminRole])
    def purge(self, request, pk=None):
        """Hard delete a global store (admin only)."""
        try:
            delete_global_store(store_id=pk)
        except (StoreNotFoundError, InvalidStoreStateError) as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)
