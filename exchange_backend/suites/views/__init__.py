from .suite import SuiteViewSet

__all__ = ["SuiteViewSet"]
