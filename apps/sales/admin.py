from django.contrib import admin
from .models import Category, Product, SalesRecord


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'level', 'parent', 'status']
    list_filter = ['level', 'status']
    search_fields = ['code', 'name']
    list_select_related = ['parent']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products."""

    list_display = ['name', 'store', 'category', 'price', 'stock', 'status', 'updated_at']
    list_filter = ['status', 'store', 'category']
    search_fields = ['name', 'description']
    list_select_related = ['store', 'category']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(SalesRecord)
class SalesRecordAdmin(admin.ModelAdmin):
    list_display = ['date', 'store', 'product', 'quantity', 'unit_price', 'sales_amount']
    list_filter = ['store', 'date']
    date_hierarchy = 'date'
    search_fields = ['product__name']
    list_select_related = ['store', 'product']
    readonly_fields = ['created_at', 'updated_at']
