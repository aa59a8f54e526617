from .auth_service import AuthService
from .listing_service import ListingService, PageLimitExceeded

__all__ = ["AuthService", "ListingService", "PageLimitExceeded"]
