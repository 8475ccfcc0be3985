"""
URL configuration for skilltracker project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.1/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from skills.views import SkillViewSet

# Create router and register viewsets
router = DefaultRouter()
router.register(r'skills', SkillViewSet, basename='skill')

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(router.urls)),
    path('api/auth/', include('accounts.urls')),
    path('api/notifications/', include('notifications.urls')),
    path('api-auth/', include('rest_framework.urls')),
]
