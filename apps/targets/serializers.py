from decimal import Decimal
from rest_framework import serializers

from apps.stores.serializers import StoreMinimalSerializer
from .models import (
    AnnualTarget,
    MonthlyTarget,
    WeeklyTarget,
    DailyTarget,
    MIN_TARGET_YEAR,
    MAX_TARGET_YEAR,
)

AMOUNT_FIELDS = [
    'target_sales_amount',
    'target_customer_count',
    'target_total_items_sold',
]


# =============================================================================
# Output serializers
# =============================================================================

class DailyTargetSerializer(serializers.ModelSerializer):
    """Daily target leaf."""

    class Meta:
        model = DailyTarget
        fields = [
            'id',
            'weekly_target_id',
            'date',
            'allocation_percentage',
            *AMOUNT_FIELDS,
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class WeeklyTargetSerializer(serializers.ModelSerializer):
    """Weekly target with its daily targets."""

    daily_targets = DailyTargetSerializer(many=True, read_only=True)

    class Meta:
        model = WeeklyTarget
        fields = [
            'id',
            'monthly_target_id',
            'start_date',
            'end_date',
            'allocation_percentage',
            *AMOUNT_FIELDS,
            'created_at',
            'updated_at',
            'daily_targets',
        ]
        read_only_fields = fields


class MonthlyTargetNestedSerializer(serializers.ModelSerializer):
    """Monthly target as nested inside its annual target."""

    weekly_targets = WeeklyTargetSerializer(many=True, read_only=True)

    class Meta:
        model = MonthlyTarget
        fields = [
            'id',
            'annual_target_id',
            'month',
            'allocation_percentage',
            *AMOUNT_FIELDS,
            'created_at',
            'updated_at',
            'weekly_targets',
        ]
        read_only_fields = fields


class AnnualTargetSerializer(serializers.ModelSerializer):
    """Annual target with store name and the full allocation tree."""

    store = StoreMinimalSerializer(read_only=True)
    monthly_targets = MonthlyTargetNestedSerializer(many=True, read_only=True)

    class Meta:
        model = AnnualTarget
        fields = [
            'id',
            'year',
            'store_id',
            *AMOUNT_FIELDS,
            'created_at',
            'updated_at',
            'store',
            'monthly_targets',
        ]
        read_only_fields = fields


class AnnualTargetMinimalSerializer(serializers.ModelSerializer):
    """Year and store name of the parent annual target."""

    store = StoreMinimalSerializer(read_only=True)

    class Meta:
        model = AnnualTarget
        fields = ['id', 'year', 'store_id', 'store']
        read_only_fields = fields


class MonthlyTargetSerializer(MonthlyTargetNestedSerializer):
    """Monthly target joined with its parent chain."""

    annual_target = AnnualTargetMinimalSerializer(read_only=True)

    class Meta(MonthlyTargetNestedSerializer.Meta):
        fields = MonthlyTargetNestedSerializer.Meta.fields + ['annual_target']
        read_only_fields = fields


# =============================================================================
# Input serializers
# =============================================================================

class TargetAmountsInputSerializer(serializers.Serializer):
    target_sales_amount = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=Decimal('0.01'),
    )
    target_customer_count = serializers.IntegerField(min_value=1)
    target_total_items_sold = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class AllocatedTargetInputSerializer(TargetAmountsInputSerializer):
    allocation_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=4,
        min_value=Decimal('0'),
        max_value=Decimal('1'),
    )


class AnnualTargetInputSerializer(TargetAmountsInputSerializer):
    """Create/update input for annual targets. Use partial=True for updates."""

    year = serializers.IntegerField(min_value=MIN_TARGET_YEAR, max_value=MAX_TARGET_YEAR)
    store_id = serializers.IntegerField(min_value=1)


class MonthlyTargetInputSerializer(AllocatedTargetInputSerializer):
    """Create/update input for monthly targets. Use partial=True for updates."""

    annual_target_id = serializers.IntegerField(min_value=1)
    month = serializers.IntegerField(min_value=1, max_value=12)


class WeeklyTargetInputSerializer(AllocatedTargetInputSerializer):
    monthly_target_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()

    def validate(self, attrs):
        if attrs['end_date'] < attrs['start_date']:
            raise serializers.ValidationError({
                'end_date': 'End date must not be before start date'
            })
        return attrs


class DailyTargetInputSerializer(AllocatedTargetInputSerializer):
    weekly_target_id = serializers.IntegerField(min_value=1)
    date = serializers.DateField()


# =============================================================================
# Query serializers
# =============================================================================

class AnnualTargetFilterSerializer(serializers.Serializer):
    storeId = serializers.IntegerField(required=False, min_value=1)
    year = serializers.IntegerField(required=False)


class MonthlyTargetFilterSerializer(serializers.Serializer):
    annualTargetId = serializers.IntegerField(required=False, min_value=1)


class WeeklyTargetFilterSerializer(serializers.Serializer):
    monthlyTargetId = serializers.IntegerField(required=False, min_value=1)


class DailyTargetFilterSerializer(serializers.Serializer):
    weeklyTargetId = serializers.IntegerField(required=False, min_value=1)
