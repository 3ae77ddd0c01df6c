"""
Custom exceptions for install-extension tool
"""


class InstallationError(Exception):
    """Base exception for installation errors"""
    pass


class ValidationError(InstallationError):
    """Raised when validation fails"""
    pass


class PermissionError(InstallationError):
    """Raised when permission operations fail"""
    pass


class ToolNotFoundError(InstallationError):
    """Raised when a required external tool is not on PATH"""
    pass


class PackagingError(InstallationError):
    """Raised when packaging or installing through an external tool fails"""
    pass
