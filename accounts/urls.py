"""
Accounts app URLs
"""
from django.urls import path
from .views import CurrentUserView, LoginView, RegisterView

urlpatterns = [
    path('register/', RegisterView.as_view(), name='auth-register'),
    path('login/', LoginView.as_view(), name='auth-login'),
    path('me/', CurrentUserView.as_view(http_method_names=['get']), name='auth-me'),
    path('profile/', CurrentUserView.as_view(), name='auth-profile'),
]
