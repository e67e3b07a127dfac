from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    StoreSerializer,
    StoreCreateSerializer,
    StoreUpdateSerializer,
    StoreFilterSerializer,
)
from .services import (
    list_stores,
    get_store,
    create_store,
    update_store,
    StoreNotFoundError,
)


@extend_schema(
    methods=['GET'],
    parameters=[
        OpenApiParameter('status', OpenApiTypes.STR, description="Store status filter, or 'all' (default: active)"),
    ],
    responses={200: StoreSerializer(many=True)},
    description="List stores ordered by name.",
    tags=['stores'],
)
@extend_schema(
    methods=['POST'],
    request=StoreCreateSerializer,
    responses={201: StoreSerializer},
    description="Register a new store.",
    tags=['stores'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def store_list(request):
    """List or register stores."""
    if request.method == 'POST':
        serializer = StoreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        store = create_store(**serializer.validated_data)
        return Response(StoreSerializer(store).data, status=status.HTTP_201_CREATED)

    query_serializer = StoreFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    status_filter = query_serializer.validated_data['status']

    stores = list_stores(status=None if status_filter == 'all' else status_filter)
    return Response(StoreSerializer(stores, many=True).data)


@extend_schema(
    methods=['GET'],
    responses={200: StoreSerializer},
    description="Get a single store.",
    tags=['stores'],
)
@extend_schema(
    methods=['PATCH'],
    request=StoreUpdateSerializer,
    responses={200: StoreSerializer},
    description="Update store details.",
    tags=['stores'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def store_detail(request, pk):
    """Retrieve or update a store."""
    if request.method == 'PATCH':
        serializer = StoreUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store = update_store(store_id=pk, **serializer.validated_data)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(StoreSerializer(store).data)

    try:
        store = get_store(store_id=pk)
    except StoreNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    return Response(StoreSerializer(store).data)
