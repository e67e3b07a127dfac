from django.urls import path

from . import views

app_name = 'sales'

urlpatterns = [
    path('categories/', views.category_list, name='category-list'),
    path('products/', views.product_list, name='product-list'),
    path('products/upload-csv/', views.product_csv_upload, name='product-csv-upload'),
    path('sales-records/', views.sales_record_list, name='sales-record-list'),
    path('sales-records/upload-csv/', views.sales_csv_upload, name='sales-csv-upload'),
]
