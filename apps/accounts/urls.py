from django.urls import path
from . import views

app_name = 'auth'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),

    # Current user
    path('me/', views.get_current_user, name='current-user'),
]
