"""
API routers.

Contains the account and submission routes of the site backend.
"""

from src.api.routers.accounts import router as accounts_router
from src.api.routers.submissions import router as submissions_router

__all__ = ["accounts_router", "submissions_router"]
