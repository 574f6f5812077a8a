"""API routers for careguard."""

from . import access

__all__ = ["access"]
