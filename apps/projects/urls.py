# apps/projects/urls.py

from django.urls import path
from . import views

app_name = 'projects'

urlpatterns = [
    path('projects', views.list_projects, name='list'),
    path('add-project', views.add_project, name='add'),
    path('delete-project/<int:project_id>', views.delete_project, name='delete'),
]
