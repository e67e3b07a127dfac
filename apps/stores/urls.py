from django.urls import path
from . import views

app_name = 'stores'

urlpatterns = [
    # GET   /api/stores/        - List stores (active by default)
    # POST  /api/stores/        - Register store
    # GET   /api/stores/{id}/   - Store details
    # PATCH /api/stores/{id}/   - Update store
    path('', views.store_list, name='store-list'),
    path('<int:pk>/', views.store_detail, name='store-detail'),
]
