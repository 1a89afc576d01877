# users/urls.py

from django.urls import path

from .views import LoginView, MeView, OwnersDirectoryView, RegisterView, UserSettingsView

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    # ---------------- AUTHENTICATED ----------------
    path("me/", MeView.as_view(), name="me"),
    path("settings/", UserSettingsView.as_view(), name="settings"),
    path("owners/", OwnersDirectoryView.as_view(), name="owners"),
]
