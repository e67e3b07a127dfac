from django.contrib import admin
from .models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ['name', 'status', 'phone', 'email', 'created_at']
    list_filter = ['status']
    search_fields = ['name', 'address', 'email']
    readonly_fields = ['created_at', 'updated_at']
