# suites/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from suites.views import SuiteViewSet

router = SimpleRouter()
router.register(r"", SuiteViewSet, basename="suites")

urlpatterns = [
    path("", include(router.urls)),
]
