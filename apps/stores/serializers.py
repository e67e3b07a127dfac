from rest_framework import serializers
from .models import Store, StoreStatus


class StoreSerializer(serializers.ModelSerializer):
    """Main serializer for stores."""

    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'address',
            'phone',
            'email',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class StoreMinimalSerializer(serializers.ModelSerializer):
    """Store name only, for nesting inside other records."""

    class Meta:
        model = Store
        fields = ['name']
        read_only_fields = fields


class StoreCreateSerializer(serializers.ModelSerializer):
    """Serializer for registering stores."""

    class Meta:
        model = Store
        fields = ['name', 'address', 'phone', 'email']


class StoreUpdateSerializer(serializers.Serializer):
    """Partial update input; every field optional."""

    name = serializers.CharField(max_length=200, required=False)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=StoreStatus.choices, required=False)


class StoreFilterSerializer(serializers.Serializer):
    """Query parameters for the store list."""

    status = serializers.ChoiceField(
        choices=StoreStatus.values + ['all'],
        required=False,
        default=StoreStatus.ACTIVE,
    )
