# forum/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from forum.views import DiscussionViewSet

router = SimpleRouter()
router.register(r"", DiscussionViewSet, basename="discussions")

urlpatterns = [
    path("", include(router.urls)),
]
