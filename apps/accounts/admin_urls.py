from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # GET   /api/users/          - List users (admin)
    # POST  /api/users/          - Register user (admin)
    # GET   /api/users/{id}/     - User details (admin)
    # PATCH /api/users/{id}/     - Update role / store (admin)
    path('', views.user_list, name='user-list'),
    path('<uuid:pk>/', views.user_detail, name='user-detail'),
]
