# applications/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from applications.views import ApplicationUploadView, SellerApplicationViewSet

router = SimpleRouter()
router.register(r"", SellerApplicationViewSet, basename="applications")

urlpatterns = [
    # before the router so "uploads" isn't read as an application id
    path("uploads/", ApplicationUploadView.as_view(), name="application-uploads"),
    path("", include(router.urls)),
]
