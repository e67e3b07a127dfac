from django.urls import path

from . import views

app_name = 'targets'

urlpatterns = [
    path('', views.annual_target_list, name='annual-list'),
    path('<int:pk>/', views.annual_target_detail, name='annual-detail'),
    path('monthly/', views.monthly_target_list, name='monthly-list'),
    path('monthly/<int:pk>/', views.monthly_target_detail, name='monthly-detail'),
    path('weekly/', views.weekly_target_list, name='weekly-list'),
    path('weekly/<int:pk>/', views.weekly_target_detail, name='weekly-detail'),
    path('daily/', views.daily_target_list, name='daily-list'),
    path('daily/<int:pk>/', views.daily_target_detail, name='daily-detail'),
]
