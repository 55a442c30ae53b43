# config/urls.py

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Main applications
    path('', include('apps.core.urls')),
    path('', include('apps.projects.urls')),
]

# Admin titles
admin.site.site_header = 'Student Project Monitor Admin'
admin.site.site_title = 'SPMS'
admin.site.index_title = 'System administration'
