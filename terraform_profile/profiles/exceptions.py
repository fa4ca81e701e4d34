"""
Exceptions raised by the profile store.

All of them derive from ProfileError so the CLI can report any failure
the same way.
"""

from typing import Any, Dict, Optional

class ProfileError(Exception):
    """Base exception for profile-related errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details as a dictionary
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ProfileNotFoundError(ProfileError):
    """Raised when a named profile is not in the store."""
    pass


class NoActiveCredentialsError(ProfileError):
    """Raised when there is no credentials file to import."""
    pass


class ProfileExistsError(ProfileError):
    """Raised when importing under a name that is already taken."""
    pass


class ProfileAlreadyImportedError(ProfileError):
    """Raised when the active credentials are already stored as a profile."""

    def __init__(self, message: str, profile_name: str):
        super().__init__(message, {"profile": profile_name})
        self.profile_name = profile_name


class UnsavedCredentialsError(ProfileError):
    """Raised when a switch would overwrite credentials that match no profile."""
    pass


class InvalidProfileNameError(ProfileError):
    """Raised for names that cannot be used as a store filename."""
    pass


class ProfileStoreError(ProfileError):
    """Raised when the store or the credentials file cannot be accessed."""
    pass
