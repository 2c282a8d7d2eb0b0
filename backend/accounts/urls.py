"""
Accounts app URL configuration.

All routes are namespaced under ``accounts`` and included in the
project-level ``urls.py`` as::

    path('api/accounts/', include('accounts.urls')),

Endpoint Map
------------
Authentication
    POST   /auth/login/                 → LoginView
    POST   /auth/token/refresh/         → TokenRefreshView (SimpleJWT)

Current User
    GET    /me/                         → MeView
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import LoginView, MeView

app_name = "accounts"

urlpatterns = [
    path("auth/login/", LoginView.as_view(), name="login"),
    path(
        "auth/token/refresh/",
        TokenRefreshView.as_view(),
        name="token-refresh",
    ),
    path("me/", MeView.as_view(), name="me"),
]
