# ==========================================
# apps/targets/admin.py
# ==========================================

from django.contrib import admin
from apps.targets.models import AnnualTarget, MonthlyTarget, WeeklyTarget, DailyTarget


class MonthlyTargetInline(admin.TabularInline):
    """Inline admin for the months of an annual target."""
    model = MonthlyTarget
    extra = 0
    fields = [
        'month',
        'allocation_percentage',
        'target_sales_amount',
        'target_customer_count',
        'target_total_items_sold',
    ]


class DailyTargetInline(admin.TabularInline):
    model = DailyTarget
    extra = 0
    fields = ['date', 'allocation_percentage', 'target_sales_amount', 'target_customer_count']


@admin.register(AnnualTarget)
class AnnualTargetAdmin(admin.ModelAdmin):
    """Admin interface for annual targets."""

    list_display = [
        'store',
        'year',
        'target_sales_amount',
        'target_customer_count',
        'target_total_items_sold',
        'updated_at'
    ]
    list_filter = ['year', 'store']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [MonthlyTargetInline]


@admin.register(MonthlyTarget)
class MonthlyTargetAdmin(admin.ModelAdmin):
    list_display = ['annual_target', 'month', 'allocation_percentage', 'target_sales_amount']
    list_filter = ['annual_target__year', 'month']
    list_select_related = ['annual_target__store']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(WeeklyTarget)
class WeeklyTargetAdmin(admin.ModelAdmin):
    list_display = ['monthly_target', 'start_date', 'end_date', 'allocation_percentage', 'target_sales_amount']
    list_select_related = ['monthly_target__annual_target__store']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [DailyTargetInline]
