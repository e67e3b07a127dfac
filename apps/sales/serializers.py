from rest_framework import serializers

from apps.stores.serializers import StoreMinimalSerializer
from .models import MAX_CATEGORY_LEVEL, Category, Product, SalesRecord


class CategoryMinimalSerializer(serializers.ModelSerializer):

    class Meta:
        model = Category
        fields = ['id', 'code', 'name']
        read_only_fields = fields


class CategorySerializer(serializers.ModelSerializer):
    """Category with its parent and active children."""

    parent = CategoryMinimalSerializer(read_only=True)
    children = CategoryMinimalSerializer(many=True, read_only=True)

    class Meta:
        model = Category
        fields = [
            'id',
            'code',
            'name',
            'level',
            'parent_id',
            'status',
            'created_at',
            'updated_at',
            'parent',
            'children',
        ]
        read_only_fields = fields


class CategoryCreateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=100)
    level = serializers.IntegerField(min_value=1, max_value=MAX_CATEGORY_LEVEL, default=1)
    parent_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class ProductSerializer(serializers.ModelSerializer):
    """Product with category and store names."""

    category = CategoryMinimalSerializer(read_only=True)
    store = StoreMinimalSerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'store_id',
            'category_id',
            'name',
            'description',
            'image_url',
            'price',
            'stock',
            'status',
            'available_at',
            'created_at',
            'updated_at',
            'category',
            'store',
        ]
        read_only_fields = fields


class ProductMinimalSerializer(serializers.ModelSerializer):

    class Meta:
        model = Product
        fields = ['name']
        read_only_fields = fields


class SalesRecordSerializer(serializers.ModelSerializer):
    """Sales record with store and product names."""

    store = StoreMinimalSerializer(read_only=True)
    product = ProductMinimalSerializer(read_only=True)

    class Meta:
        model = SalesRecord
        fields = [
            'id',
            'date',
            'store_id',
            'product_id',
            'quantity',
            'unit_price',
            'sales_amount',
            'customer_attribute',
            'created_at',
            'updated_at',
            'store',
            'product',
        ]
        read_only_fields = fields


class ProductFilterSerializer(serializers.Serializer):
    storeId = serializers.IntegerField(required=False, min_value=1)
    categoryId = serializers.IntegerField(required=False, min_value=1)


class SalesRecordFilterSerializer(serializers.Serializer):
    """Query parameters for the sales record list. Dates are inclusive."""

    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)
    storeId = serializers.IntegerField(required=False, min_value=1)

    def validate(self, attrs):
        start_date = attrs.get('startDate')
        end_date = attrs.get('endDate')
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({
                'endDate': 'End date must not be before start date'
            })
        return attrs


class CsvUploadSerializer(serializers.Serializer):
    """Multipart input for the sales and product CSV imports."""

    file = serializers.FileField()
    storeId = serializers.IntegerField(min_value=1)


class CsvImportErrorSerializer(serializers.Serializer):
    row = serializers.IntegerField()
    data = serializers.DictField(child=serializers.CharField(allow_null=True, allow_blank=True))
    message = serializers.CharField()


class CsvImportResultSerializer(serializers.Serializer):
    message = serializers.CharField()
    imported_count = serializers.IntegerField()
    error_count = serializers.IntegerField()
    errors = CsvImportErrorSerializer(many=True)
