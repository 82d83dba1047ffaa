"""Resolver API client exceptions"""

from typing import Optional


class ResolverError(Exception):
    """Base exception for the resolver API client"""
    pass


class ResolverConnectionError(ResolverError):
    """Failed to reach the resolver API"""
    pass


class ResolverAPIError(ResolverError):
    """Resolver API request failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ResolverResponseError(ResolverError):
    """Resolver API returned a body that could not be understood"""
    pass
