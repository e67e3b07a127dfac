from rest_framework import serializers
from apps.stores.serializers import StoreMinimalSerializer
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """User profile with the home store name nested."""

    store = StoreMinimalSerializer(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'role',
            'store_id',
            'store',
            'is_active',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserCreateSerializer(serializers.Serializer):
    """Input for registering a user profile (admin only)."""

    email = serializers.EmailField(required=True)
    name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(choices=UserRole.choices, required=False, default=UserRole.STORE_STAFF)
    store_id = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)
    password = serializers.CharField(
        required=False,
        write_only=True,
        allow_null=True,
        default=None,
        style={'input_type': 'password'}
    )


class UserUpdateSerializer(serializers.Serializer):
    """Partial update input for user administration."""

    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    store_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False)
