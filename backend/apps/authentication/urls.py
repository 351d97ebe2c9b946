"""
Authentication URL configuration.
"""

from django.urls import path
from .views import (
    CaptchaView,
    RegisterView,
    LoginView,
    RefreshTokenView,
    LogoutView,
    ProfileView,
)

app_name = 'authentication'

urlpatterns = [
    # GET /api/auth/captcha
    # Issue an SVG captcha for the login form
    path('captcha', CaptchaView.as_view(), name='captcha'),

    # POST /api/auth/register
    # Register a new user
    path('register', RegisterView.as_view(), name='register'),

    # POST /api/auth/login
    # Login with username or email and get tokens
    path('login', LoginView.as_view(), name='login'),

    # POST /api/auth/refresh
    # Refresh access token using refresh token
    path('refresh', RefreshTokenView.as_view(), name='refresh'),

    # POST /api/auth/logout
    # Logout user and revoke refresh token
    path('logout', LogoutView.as_view(), name='logout'),

    # GET /api/auth/profile
    # Get current user info (protected)
    path('profile', ProfileView.as_view(), name='profile'),
]
