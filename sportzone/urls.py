from django.contrib import admin
from django.urls import path, include
from django.conf import settings

# Main URL configuration
urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('store.urls')),
]

# Live reload for the admin during development
if settings.DEBUG:
    urlpatterns += [
        path("__reload__/", include("django_browser_reload.urls")),
    ]
