from .auth import LoginView, RegisterView
from .me import MeView, UserSettingsView
from .owners import OwnersDirectoryView

__all__ = [
    "RegisterView",
    "LoginView",
    "MeView",
    "UserSettingsView",
    "OwnersDirectoryView",
]
