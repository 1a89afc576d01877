from .application import SellerApplicationViewSet
from .upload import ApplicationUploadView

__all__ = [
    "ApplicationUploadView",
    "SellerApplicationViewSet",
]
