from .application import (
    ApplicationAttachmentSerializer,
    ApplicationDecisionSerializer,
    SellerApplicationSerializer,
    SellerApplicationSubmitSerializer,
)

__all__ = [
    "ApplicationAttachmentSerializer",
    "ApplicationDecisionSerializer",
    "SellerApplicationSerializer",
    "SellerApplicationSubmitSerializer",
]
