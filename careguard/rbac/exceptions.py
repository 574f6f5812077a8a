"""Exceptions for careguard RBAC."""


class ConfigurationError(ValueError):
    """Raised when a policy table or route catalog is malformed.

    Only raised while building policy objects at startup; permission
    queries never raise it.
    """
