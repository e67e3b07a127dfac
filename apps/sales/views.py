from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.stores.services import StoreNotFoundError
from .serializers import (
    CategorySerializer,
    CategoryCreateSerializer,
    ProductSerializer,
    SalesRecordSerializer,
    ProductFilterSerializer,
    SalesRecordFilterSerializer,
    CsvUploadSerializer,
    CsvImportResultSerializer,
)
from .services import (
    list_categories,
    create_category,
    list_products,
    list_sales_records,
    import_sales_csv,
    import_products_csv,
    InvalidCsvError,
    DuplicateCategoryError,
    InvalidCategoryError,
)


@extend_schema(
    methods=['GET'],
    responses={200: CategorySerializer(many=True)},
    description="List active categories by level and code, with parent and children.",
    tags=['sales'],
)
@extend_schema(
    methods=['POST'],
    request=CategoryCreateSerializer,
    responses={201: CategorySerializer},
    description="Create a category. Codes are unique across levels.",
    tags=['sales'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def category_list(request):
    """List or create categories."""
    if request.method == 'POST':
        serializer = CategoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = create_category(**serializer.validated_data)
        except (DuplicateCategoryError, InvalidCategoryError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    return Response(CategorySerializer(list_categories(), many=True).data)


@extend_schema(
    parameters=[
        OpenApiParameter('storeId', OpenApiTypes.INT, description='Only products of this store'),
        OpenApiParameter('categoryId', OpenApiTypes.INT, description='Only products in this category'),
    ],
    responses={200: ProductSerializer(many=True)},
    description="List active products ordered by name.",
    tags=['sales'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def product_list(request):
    query_serializer = ProductFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    filters = query_serializer.validated_data

    products = list_products(
        store_id=filters.get('storeId'),
        category_id=filters.get('categoryId'),
    )
    return Response(ProductSerializer(products, many=True).data)


@extend_schema(
    parameters=[
        OpenApiParameter('startDate', OpenApiTypes.DATE, description='First day (inclusive)'),
        OpenApiParameter('endDate', OpenApiTypes.DATE, description='Last day (inclusive)'),
        OpenApiParameter('storeId', OpenApiTypes.INT, description='Only records of this store'),
    ],
    responses={200: SalesRecordSerializer(many=True)},
    description="List sales records, newest first.",
    tags=['sales'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def sales_record_list(request):
    query_serializer = SalesRecordFilterSerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    filters = query_serializer.validated_data

    records = list_sales_records(
        start_date=filters.get('startDate'),
        end_date=filters.get('endDate'),
        store_id=filters.get('storeId'),
    )
    return Response(SalesRecordSerializer(records, many=True).data)


def _import_response(import_csv, request):
    serializer = CsvUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        result = import_csv(
            store_id=serializer.validated_data['storeId'],
            file=serializer.validated_data['file'],
        )
    except (StoreNotFoundError, InvalidCsvError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': result.message,
        'imported_count': result.imported_count,
        'error_count': result.error_count,
        'errors': result.errors,
    })


@extend_schema(
    request={'multipart/form-data': CsvUploadSerializer},
    responses={200: CsvImportResultSerializer},
    description="Import a POS sales CSV into a store. "
                "Bad rows are reported in `errors` and do not stop the import.",
    tags=['sales'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def sales_csv_upload(request):
    """Import sales records from an uploaded CSV file."""
    return _import_response(import_sales_csv, request)


@extend_schema(
    request={'multipart/form-data': CsvUploadSerializer},
    responses={200: CsvImportResultSerializer},
    description="Import a POS product master CSV into a store, creating "
                "level 1 and level 2 categories by code.",
    tags=['sales'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def product_csv_upload(request):
    """Import products from an uploaded product master CSV."""
    return _import_response(import_products_csv, request)
