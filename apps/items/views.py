from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema
from apps.prices.services import PricesServiceError
from apps.stores.services import StoreNotFoundError
from .serializers import (
    ItemSerializer,
    ItemListSerializer,
    ItemCreateSerializer,
    ItemUpdateSerializer,
    ItemFilterSerializer,
    CategorySerializer,
    CategoryDetailSerializer,
    CategoryCreateSerializer,
    CategoryItemSerializer,
)
from .services import (
    get_item,
    create_item,
    update_item,
    deactivate_item,
    search_items,
    get_category,
    list_categories,
    create_category,
    update_category,
    archive_category,
    add_item_to_category,
    remove_item_from_category,
    ItemsServiceError,
    ItemNotFoundError,
    CategoryNotFoundError,
    DuplicateItemError,
    DuplicateCategoryError,
    DuplicateCategoryItemError,
    ItemNotInCategoryError,
)


class ItemPagination(PageNumberPagination):
    """Custom pagination for items."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _error_response(error):
    if isinstance(error, (ItemNotFoundError, CategoryNotFoundError,
                          ItemNotInCategoryError, StoreNotFoundError)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (DuplicateItemError, DuplicateCategoryError, DuplicateCategoryItemError)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


class ItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the user's items.

    list: Search items (filters below)
    create: Create an item with its first price
    retrieve: Item details with categories and current price
    update / partial_update: Edit name, description, unit, brand, favorite
    destroy: Deactivate item (price history is kept)
    """

    serializer_class = ItemSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ItemPagination
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        """
        Filters:
        - search: keyword in name
        - brand, unit, is_favorite, category
        - created_after / created_before: ISO datetimes
        - is_active: true (default) / false
        """
        if self.action != 'list':
            return search_items(owner=self.request.user)

        filters = ItemFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data
        params['category_id'] = params.pop('category', None)
        return search_items(owner=self.request.user, **params)

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return ItemListSerializer
        elif self.action == 'create':
            return ItemCreateSerializer
        elif self.action in ('update', 'partial_update'):
            return ItemUpdateSerializer
        return ItemSerializer

    @extend_schema(parameters=[ItemFilterSerializer])
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        """Create a new item with its initial price observation."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item = create_item(owner=request.user, **serializer.validated_data)
        except (ItemsServiceError, StoreNotFoundError, PricesServiceError) as e:
            return _error_response(e)

        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            item = update_item(
                item_id=kwargs.get('pk'),
                owner=request.user,
                data=serializer.validated_data
            )
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(ItemSerializer(get_item(item_id=item.id, owner=request.user)).data)

    def destroy(self, request, *args, **kwargs):
        """Soft delete an item."""
        try:
            deactivate_item(item_id=kwargs.get('pk'), owner=request.user)
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for categories.

    list / retrieve: Active categories (retrieve includes items)
    create / update / partial_update: Manage name and description
    destroy: Archive category
    add_item / remove_item: Manage membership
    """

    serializer_class = CategorySerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        return list_categories(owner=self.request.user)

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return CategoryDetailSerializer
        elif self.action in ('create', 'update', 'partial_update'):
            return CategoryCreateSerializer
        elif self.action in ('add_item', 'remove_item'):
            return CategoryItemSerializer
        return CategorySerializer

    def retrieve(self, request, *args, **kwargs):
        try:
            category = get_category(category_id=kwargs.get('pk'), owner=request.user)
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(CategoryDetailSerializer(category).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = create_category(owner=request.user, **serializer.validated_data)
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(CategoryDetailSerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            category = update_category(
                category_id=kwargs.get('pk'),
                owner=request.user,
                data=serializer.validated_data
            )
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(CategoryDetailSerializer(category).data)

    def destroy(self, request, *args, **kwargs):
        try:
            archive_category(category_id=kwargs.get('pk'), owner=request.user)
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=CategoryItemSerializer, responses={200: CategoryDetailSerializer})
    @action(detail=True, methods=['post'], url_path='add-item')
    def add_item(self, request, pk=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            add_item_to_category(
                category_id=pk,
                item_id=serializer.validated_data['item_id'],
                owner=request.user
            )
            category = get_category(category_id=pk, owner=request.user)
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(CategoryDetailSerializer(category).data)

    @extend_schema(request=CategoryItemSerializer, responses={200: CategoryDetailSerializer})
    @action(detail=True, methods=['post'], url_path='remove-item')
    def remove_item(self, request, pk=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            remove_item_from_category(
                category_id=pk,
                item_id=serializer.validated_data['item_id'],
                owner=request.user
            )
            category = get_category(category_id=pk, owner=request.user)
        except ItemsServiceError as e:
            return _error_response(e)

        return Response(CategoryDetailSerializer(category).data)
