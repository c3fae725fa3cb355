# core/errors.py
from typing import List, Optional


class MarketplaceError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class ValidationFailure(MarketplaceError):
    status_code = 400


class DuplicateFailure(MarketplaceError):
    status_code = 400


class BusinessRuleFailure(MarketplaceError):
    status_code = 400


class AuthorizationFailure(MarketplaceError):
    status_code = 401

    def __init__(self, message: str = "Not authorized", errors: Optional[List[str]] = None):
        super().__init__(message, errors)


class NotFoundFailure(MarketplaceError):
    status_code = 404

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")
        self.resource = resource
