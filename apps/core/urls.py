# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('', views.api_index, name='index'),

    # === AUTHENTICATION ===
    path('register', views.register_view, name='register'),
    path('login', views.login_view, name='login'),
    path('logout', views.logout_view, name='logout'),

    # === MONITORING ===
    path('health/', views.health_check, name='health'),
]
