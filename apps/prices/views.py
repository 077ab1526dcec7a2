from rest_framework import viewsets, status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import (
    PriceObservationCreateSerializer,
    ObservationNotesSerializer,
    ObservationSearchQuerySerializer,
    InflationQuerySerializer,
    PriceAlertCreateSerializer,
    InflationReportCreateSerializer,
    PriceObservationSerializer,
    ObservationPageSerializer,
    InflationResultSerializer,
    PriceAlertSerializer,
    InflationReportSerializer,
    ErrorSerializer,
)
from .services import (
    get_active_item,
    PriceObservationFilter,
    find_by_filters,
    find_latest_active_price,
    compute_inflation,
    record_price,
    update_observation_notes,
    create_alert,
    list_alerts,
    deactivate_alert,
    generate_inflation_report,
    list_reports,
    deactivate_report,
    PricesServiceError,
    PriceNotFoundError,
)


def _error_response(error: PricesServiceError) -> Response:
    """Not-found errors map to 404, everything else to 400."""
    if isinstance(error, PriceNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_400_BAD_REQUEST
    return Response({'error': str(error)}, status=code)


def _search(request, **fixed_filters):
    query = ObservationSearchQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    criteria = PriceObservationFilter(
        item_id=fixed_filters.get('item_id', params.get('item')),
        store_id=params.get('store'),
        store_type=params.get('store_type'),
        store_name=params.get('store_name'),
        city=params.get('city'),
        currency=params.get('currency'),
        date_from=params.get('date_from'),
        date_to=params.get('date_to'),
        min_price=params.get('min_price'),
        max_price=params.get('max_price'),
        is_active=params.get('is_active'),
        owner_id=request.user.id,
    )

    try:
        page = find_by_filters(
            criteria,
            page=params['page'],
            page_size=params.get('page_size'),
            ordering=params['ordering'],
        )
    except PricesServiceError as e:
        return _error_response(e)

    return Response(ObservationPageSerializer(page).data)


@extend_schema(
    parameters=[ObservationSearchQuerySerializer],
    responses={200: ObservationPageSerializer, 400: ErrorSerializer},
    description="Search price observations of the user's items. All filters are optional and combined with AND.",
    tags=['prices'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def observation_search(request):
    """Filtered, paginated observation search - thin HTTP handler."""
    return _search(request)


@extend_schema(
    methods=['GET'],
    parameters=[ObservationSearchQuerySerializer],
    responses={200: ObservationPageSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Price history of one item, with the same filters as the search.",
    tags=['prices'],
)
@extend_schema(
    methods=['POST'],
    request=PriceObservationCreateSerializer,
    responses={201: PriceObservationSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Record a new price. The previous active price of the item becomes inactive.",
    tags=['prices'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def item_observations(request, item_id):
    if request.method == 'GET':
        try:
            get_active_item(item_id=item_id, owner=request.user)
        except PricesServiceError as e:
            return _error_response(e)
        return _search(request, item_id=item_id)

    serializer = PriceObservationCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        observation = record_price(
            item_id=item_id,
            owner=request.user,
            **serializer.validated_data
        )
    except PricesServiceError as e:
        return _error_response(e)

    return Response(
        PriceObservationSerializer(observation).data,
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    request=ObservationNotesSerializer,
    responses={200: PriceObservationSerializer, 404: ErrorSerializer},
    description="Edit the notes of an observation. Price, currency, date and location are immutable.",
    tags=['prices'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def observation_notes(request, observation_id):
    serializer = ObservationNotesSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        observation = update_observation_notes(
            observation_id=observation_id,
            owner=request.user,
            notes=serializer.validated_data['notes']
        )
    except PricesServiceError as e:
        return _error_response(e)

    return Response(PriceObservationSerializer(observation).data)


@extend_schema(
    responses={200: PriceObservationSerializer, 404: ErrorSerializer},
    description="Most recently recorded active price of an item.",
    tags=['prices'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def latest_price(request, item_id):
    try:
        observation = find_latest_active_price(item_id=item_id, owner=request.user)
    except PricesServiceError as e:
        return _error_response(e)

    return Response(PriceObservationSerializer(observation).data)


@extend_schema(
    parameters=[
        OpenApiParameter('currency', OpenApiTypes.STR, description='EUR or USD', required=True),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date (YYYY-MM-DD)', required=True),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date (YYYY-MM-DD)', required=True),
    ],
    responses={200: InflationResultSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description=(
        "Inflation of an item between two dates. With fewer than two observations "
        "the response reports insufficient data instead of a rate."
    ),
    tags=['prices'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def item_inflation(request, item_id):
    query = InflationQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    try:
        result = compute_inflation(
            item_id=item_id,
            owner=request.user,
            **query.validated_data
        )
    except PricesServiceError as e:
        return _error_response(e)

    return Response(InflationResultSerializer(result.to_dict()).data)


class PriceAlertViewSet(viewsets.ModelViewSet):
    """
    ViewSet for price alerts.

    list: Active alerts of the user (?item=<uuid> to narrow down)
    create: Create an alert on an owned item
    retrieve: Get an alert
    destroy: Deactivate an alert
    """

    serializer_class = PriceAlertSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ['get', 'post', 'delete', 'head', 'options']
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        item = self.request.query_params.get('item')
        return list_alerts(
            user=self.request.user,
            item_id=serializers.UUIDField().to_internal_value(item) if item else None,
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return PriceAlertCreateSerializer
        return PriceAlertSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            alert = create_alert(user=request.user, **serializer.validated_data)
        except PricesServiceError as e:
            return _error_response(e)

        return Response(PriceAlertSerializer(alert).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        try:
            deactivate_alert(alert_id=kwargs.get('pk'), user=request.user)
        except PricesServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)


class InflationReportViewSet(viewsets.ModelViewSet):
    """
    ViewSet for category inflation reports.

    list / retrieve: Active reports of the user
    create: Generate a report for a category
    destroy: Deactivate a report
    """

    serializer_class = InflationReportSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ['get', 'post', 'delete', 'head', 'options']
    lookup_value_regex = '[0-9a-f-]{36}'

    def get_queryset(self):
        return list_reports(user=self.request.user)

    def get_serializer_class(self):
        if self.action == 'create':
            return InflationReportCreateSerializer
        return InflationReportSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            report = generate_inflation_report(user=request.user, **serializer.validated_data)
        except PricesServiceError as e:
            return _error_response(e)

        return Response(InflationReportSerializer(report).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        try:
            deactivate_report(report_id=kwargs.get('pk'), user=request.user)
        except PricesServiceError as e:
            return _error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)
