from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    AnnualTargetSerializer,
    MonthlyTargetSerializer,
    WeeklyTargetSerializer,
    DailyTargetSerializer,
    AnnualTargetInputSerializer,
    MonthlyTargetInputSerializer,
    WeeklyTargetInputSerializer,
    DailyTargetInputSerializer,
    AnnualTargetFilterSerializer,
    MonthlyTargetFilterSerializer,
    WeeklyTargetFilterSerializer,
    DailyTargetFilterSerializer,
)
from .services import (
    list_annual_targets,
    get_annual_target,
    create_annual_target,
    update_annual_target,
    delete_annual_target,
    list_monthly_targets,
    get_monthly_target,
    create_monthly_target,
    update_monthly_target,
    delete_monthly_target,
    list_weekly_targets,
    get_weekly_target,
    create_weekly_target,
    delete_weekly_target,
    list_daily_targets,
    get_daily_target,
    create_daily_target,
    delete_daily_target,
    TargetNotFoundError,
    DuplicateTargetError,
    InvalidReferenceError,
    AllocationExceededError,
    InvalidDateRangeError,
)

# Errors caused by the request body rather than the addressed resource
INPUT_ERRORS = (
    DuplicateTargetError,
    InvalidReferenceError,
    AllocationExceededError,
    InvalidDateRangeError,
)

DELETED_RESPONSE_SCHEMA = {
    'type': 'object',
    'properties': {'message': {'type': 'string'}},
}


# =============================================================================
# Annual targets
# =============================================================================

@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('storeId', OpenApiTypes.INT, description='Only targets of this store'),
        OpenApiParameter('year', OpenApiTypes.INT, description='Only targets of this year'),
    ],
    responses={200: AnnualTargetSerializer(many=True)},
    description="List annual targets with their monthly, weekly and daily allocations.",
    tags=['targets'],
)
@extend_schema(
    methods=['POST'],
    request=AnnualTargetInputSerializer,
    responses={201: AnnualTargetSerializer},
    description="Create the annual target of a store. One target per store and year.",
    tags=['targets'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def annual_target_list(request):
    """List or create annual targets."""
    if request.method == 'POST':
        serializer = AnnualTargetInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            target = create_annual_target(**serializer.validated_data)
        except INPUT_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AnnualTargetSerializer(target).data, status=status.HTTP_201_CREATED)

    query_serializer = AnnualTargetFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    filters = query_serializer.validated_data

    targets = list_annual_targets(
        store_id=filters.get('storeId'),
        year=filters.get('year'),
    )
    return Response(AnnualTargetSerializer(targets, many=True).data)


@extend_schema(
    methods=['GET'],
    responses={200: AnnualTargetSerializer},
    description="Get an annual target with its allocation tree.",
    tags=['targets'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=AnnualTargetInputSerializer,
    responses={200: AnnualTargetSerializer},
    description="Update an annual target. Omitted fields keep their values.",
    tags=['targets'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: DELETED_RESPONSE_SCHEMA},
    description="Delete an annual target together with all its monthly, weekly and daily targets.",
    tags=['targets'],
)
@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def annual_target_detail(request, pk):
    """Retrieve, update or delete an annual target."""
    if request.method in ('PUT', 'PATCH'):
        serializer = AnnualTargetInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            target = update_annual_target(target_id=pk, **serializer.validated_data)
        except TargetNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except INPUT_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(AnnualTargetSerializer(target).data)

    if request.method == 'DELETE':
        try:
            delete_annual_target(target_id=pk)
        except TargetNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Annual target deleted successfully'})

    try:
        target = get_annual_target(target_id=pk)
    except TargetNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(AnnualTargetSerializer(target).data)


# =============================================================================
# Monthly targets
# =============================================================================

@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('annualTargetId', OpenApiTypes.INT, description='Only months of this annual target'),
    ],
    responses={200: MonthlyTargetSerializer(many=True)},
    description="List monthly targets ordered by month.",
    tags=['targets'],
)
@extend_schema(
    methods=['POST'],
    request=MonthlyTargetInputSerializer,
    responses={201: MonthlyTargetSerializer},
    description="Allocate part of an annual target to a month. "
                "Allocations of one annual target may not exceed 100%.",
    tags=['targets'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def monthly_target_list(request):
    """List or create monthly targets."""
    if request.method == 'POST':
        serializer = MonthlyTargetInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            target = create_monthly_target(**serializer.validated_data)
        except INPUT_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(MonthlyTargetSerializer(target).data, status=status.HTTP_201_CREATED)

    query_serializer = MonthlyTargetFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    targets = list_monthly_targets(
        annual_target_id=query_serializer.validated_data.get('annualTargetId'),
    )
    return Response(MonthlyTargetSerializer(targets, many=True).data)


@extend_schema(
    methods=['GET'],
    responses={200: MonthlyTargetSerializer},
    description="Get a monthly target.",
    tags=['targets'],
)
@extend_schema(
    methods=['PUT', 'PATCH'],
    request=MonthlyTargetInputSerializer,
    responses={200: MonthlyTargetSerializer},
    description="Update a monthly target. Omitted fields keep their values.",
    tags=['targets'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: DELETED_RESPONSE_SCHEMA},
    description="Delete a monthly target together with its weekly and daily targets.",
    tags=['targets'],
)
@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def monthly_target_detail(request, pk):
    """Retrieve, update or delete a monthly target."""
    if request.method in ('PUT', 'PATCH'):
        serializer = MonthlyTargetInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            target = update_monthly_target(target_id=pk, **serializer.validated_data)
        except TargetNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except INPUT_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(MonthlyTargetSerializer(target).data)

    if request.method == 'DELETE':
        try:
            delete_monthly_target(target_id=pk)
        except TargetNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'message': 'Monthly target deleted successfully'})

    try:
        target = get_monthly_target(target_id=pk)
    except TargetNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(MonthlyTargetSerializer(target).data)


# =============================================================================
# Weekly targets
# =============================================================================

@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('monthlyTargetId', OpenApiTypes.INT, description='Only weeks of this monthly target'),
    ],
    responses={200: WeeklyTargetSerializer(many=True)},
    description="List weekly targets ordered by start date.",
    tags=['targets'],
)
@extend_schema(
    methods=['POST'],
    request=WeeklyTargetInputSerializer,
    responses={201: WeeklyTargetSerializer},
    description="Allocate part of a monthly target to a date range.",
    tags=['targets'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def weekly_target_list(request):
    if request.method == 'POST':
        serializer = WeeklyTargetInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            target = create_weekly_target(**serializer.validated_data)
        except INPUT_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WeeklyTargetSerializer(target).data, status=status.HTTP_201_CREATED)

    query_serializer = WeeklyTargetFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    targets = list_weekly_targets(
        monthly_target_id=query_serializer.validated_data.get('monthlyTargetId'),
    )
    return Response(WeeklyTargetSerializer(targets, many=True).data)


@extend_schema(
    methods=['GET'],
    responses={200: WeeklyTargetSerializer},
    tags=['targets'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: DELETED_RESPONSE_SCHEMA},
    description="Delete a weekly target together with its daily targets.",
    tags=['targets'],
)
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def weekly_target_detail(request, pk):
    try:
        if request.method == 'DELETE':
            delete_weekly_target(target_id=pk)
            return Response({'message': 'Weekly target deleted successfully'})

        target = get_weekly_target(target_id=pk)
    except TargetNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(WeeklyTargetSerializer(target).data)


# =============================================================================
# Daily targets
# =============================================================================

@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('weeklyTargetId', OpenApiTypes.INT, description='Only days of this weekly target'),
    ],
    responses={200: DailyTargetSerializer(many=True)},
    description="List daily targets ordered by date.",
    tags=['targets'],
)
@extend_schema(
    methods=['POST'],
    request=DailyTargetInputSerializer,
    responses={201: DailyTargetSerializer},
    description="Allocate part of a weekly target to a day inside the week.",
    tags=['targets'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def daily_target_list(request):
    if request.method == 'POST':
        serializer = DailyTargetInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            target = create_daily_target(**serializer.validated_data)
        except INPUT_ERRORS as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(DailyTargetSerializer(target).data, status=status.HTTP_201_CREATED)

    query_serializer = DailyTargetFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    targets = list_daily_targets(
        weekly_target_id=query_serializer.validated_data.get('weeklyTargetId'),
    )
    return Response(DailyTargetSerializer(targets, many=True).data)


@extend_schema(
    methods=['GET'],
    responses={200: DailyTargetSerializer},
    tags=['targets'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: DELETED_RESPONSE_SCHEMA},
    tags=['targets'],
)
@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def daily_target_detail(request, pk):
    try:
        if request.method == 'DELETE':
            delete_daily_target(target_id=pk)
            return Response({'message': 'Daily target deleted successfully'})

        target = get_daily_target(target_id=pk)
    except TargetNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(DailyTargetSerializer(target).data)
