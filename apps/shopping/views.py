from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.items.services import ItemNotFoundError
from apps.prices.services import PricesServiceError, PriceNotFoundError
from apps.stores.services import StoreNotFoundError
from .serializers import (
    ShoppingListSerializer,
    ShoppingListCreateSerializer,
    ShoppingListFilterSerializer,
    ShoppingListItemSerializer,
    ListItemCreateSerializer,
    PurchaseSerializer,
)
from .services import (
    get_shopping_list,
    list_shopping_lists,
    create_shopping_list,
    update_shopping_list,
    deactivate_shopping_list,
    add_list_item,
    remove_list_item,
    mark_purchased,
    ShoppingServiceError,
    ShoppingListNotFoundError,
    ShoppingListItemNotFoundError,
    DuplicateListItemError,
    AlreadyPurchasedError,
)


class ShoppingListPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error_response(error):
    if isinstance(error, (ShoppingListNotFoundError, ShoppingListItemNotFoundError,
                          ItemNotFoundError, StoreNotFoundError, PriceNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (DuplicateListItemError, AlreadyPurchasedError)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


ENTRY_ERRORS = (ShoppingServiceError, ItemNotFoundError, StoreNotFoundError, PricesServiceError)


class ShoppingListViewSet(viewsets.ModelViewSet):
    """
    ViewSet for shopping lists.

    list: Active lists of the user (?is_favorite=true|false)
    create: Create a list
    retrieve: List with its entries and total spent
    update / partial_update: Edit name, description, favorite
    destroy: Deactivate list and its entries
    add_item / remove_item / purchase: Manage entries
    """

    serializer_class = ShoppingListSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ShoppingListPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        filters = ShoppingListFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_shopping_lists(owner=self.request.user, **filters.validated_data)

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return ShoppingListCreateSerializer
        elif self.action == 'add_item':
            return ListItemCreateSerializer
        elif self.action == 'purchase':
            return PurchaseSerializer
        return ShoppingListSerializer

    @extend_schema(parameters=[ShoppingListFilterSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        try:
            shopping_list = get_shopping_list(list_id=kwargs.get('pk'), owner=request.user)
        except ShoppingServiceError as e:
            return _error_response(e)

        return Response(ShoppingListSerializer(shopping_list).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        shopping_list = create_shopping_list(owner=request.user, **serializer.validated_data)
        shopping_list = get_shopping_list(list_id=shopping_list.id, owner=request.user)
        return Response(ShoppingListSerializer(shopping_list).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            update_shopping_list(
                list_id=kwargs.get('pk'),
                owner=request.user,
                data=serializer.validated_data
            )
            shopping_list = get_shopping_list(list_id=kwargs.get('pk'), owner=request.user)
        except ShoppingServiceError as e:
            return _error_response(e)

        return Response(ShoppingListSerializer(shopping_list).data)

    def destroy(self, request, *args, **kwargs):
        try:
            deactivate_shopping_list(list_id=kwargs.get('pk'), owner=request.user)
        except ShoppingServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ListItemCreateSerializer, responses={201: ShoppingListItemSerializer})
    @action(detail=True, methods=['post'], url_path='items')
    def add_item(self, request, pk=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            entry = add_list_item(list_id=pk, owner=request.user, **serializer.validated_data)
        except ENTRY_ERRORS as e:
            return _error_response(e)

        return Response(ShoppingListItemSerializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={204: None})
    @action(
        detail=True,
        methods=['delete'],
        url_path=r'items/(?P<entry_id>[0-9a-f-]{36})'
    )
    def remove_item(self, request, pk=None, entry_id=None):
        try:
            remove_list_item(list_id=pk, owner=request.user, entry_id=entry_id)
        except ShoppingServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=PurchaseSerializer, responses={200: ShoppingListItemSerializer})
    @action(
        detail=True,
        methods=['post'],
        url_path=r'items/(?P<entry_id>[0-9a-f-]{36})/purchase'
    )
    def purchase(self, request, pk=None, entry_id=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            entry = mark_purchased(
                list_id=pk,
                owner=request.user,
                entry_id=entry_id,
                **serializer.validated_data
            )
        except ENTRY_ERRORS as e:
            return _error_response(e)

        return Response(ShoppingListItemSerializer(entry).data)
