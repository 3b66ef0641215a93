# -*- coding: utf-8 -*-
# accounts/urls.py
from __future__ import annotations

from django.contrib.auth import views as auth_views
from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    # Auth
    path("", views.DashboardLoginView.as_view(), name="login"),
    path("logout/", auth_views.LogoutView.as_view(next_page="accounts:login"), name="logout"),
    path("signup/", views.signup, name="signup"),

    # View-only browsing
    path("view-only/", views.view_only_enter, name="view_only"),
    path("view-only/exit/", views.view_only_exit, name="view_only_exit"),

    # Invite / approval flow
    path("set-password/<uidb64>/<token>/", views.set_password_from_invite, name="set_password"),

    # User management (admin)
    path("users/", views.user_list, name="user_list"),
    path("users/<int:user_id>/approve/", views.user_approve, name="user_approve"),
    path("users/<int:user_id>/reject/", views.user_reject, name="user_reject"),
    path("users/<int:user_id>/level/", views.user_set_level, name="user_set_level"),
]
