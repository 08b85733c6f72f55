# -*- coding: utf-8 -*-
"""
LocForge Exceptions Module
Custom exception classes for structured error handling across the application.

The UI layer turns these into user-visible text; the core only raises them
with enough context (operation, key, name, path) to build a message.
"""


class LocForgeError(Exception):
    """
    Base exception class for all LocForge-related errors.

    Attributes:
        message: Human-readable error message
        details: Optional additional details (dict, string, etc.)
    """

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Input Exceptions (caller-fixable)
# =============================================================================

class InputError(LocForgeError):
    """Base exception for contract violations the caller can fix."""
    pass


class EmptyQueryError(InputError):
    """Raised when a search comparison is requested without a query."""

    def __init__(self, message: str = "Search query must not be empty", operation: str = "compare"):
        super().__init__(message, details={'operation': operation})
        self.operation = operation


class InvalidCompareModeError(InputError):
    """Raised for an unknown compare mode or missing reference store."""

    def __init__(self, message: str, mode=None):
        super().__init__(message, details={'mode': mode})
        self.mode = mode


class ProfileFormatError(InputError):
    """Raised when an order profile document fails the shape check."""

    def __init__(self, message: str, name: str = None, file_path: str = None):
        super().__init__(message, details={'name': name, 'file_path': file_path})
        self.name = name
        self.file_path = file_path


class OrderIndexError(InputError):
    """Raised when a move targets a position outside the ordered list."""

    def __init__(self, message: str, from_index: int = None, to_index: int = None):
        super().__init__(message, details={'from_index': from_index, 'to_index': to_index})
        self.from_index = from_index
        self.to_index = to_index


class UnknownVehicleError(InputError):
    """Raised when an order operation names a base key with no vehicle group."""

    def __init__(self, message: str, base_key: str = None):
        super().__init__(message, details={'base_key': base_key})
        self.base_key = base_key


class VehicleOrderStateError(InputError):
    """Raised when a known vehicle is already in, or not in, the ordered list."""

    def __init__(self, message: str, base_key: str = None, ordered: bool = None):
        super().__init__(message, details={'base_key': base_key, 'ordered': ordered})
        self.base_key = base_key
        self.ordered = ordered


class InvalidLocaleError(InputError):
    """Raised for an empty locale name or an unusable game root."""

    def __init__(self, message: str, locale: str = None):
        super().__init__(message, details={'locale': locale})
        self.locale = locale


# =============================================================================
# Not Found Exceptions
# =============================================================================

class NotFoundError(LocForgeError):
    """Base exception for missing profiles and files."""
    pass


class ProfileNotFoundError(NotFoundError):
    """Raised when loading or deleting a profile that does not exist."""

    def __init__(self, message: str, name: str = None):
        super().__init__(message, details={'name': name})
        self.name = name


class LocaleFileNotFoundError(NotFoundError):
    """Raised when a locale file path does not exist."""

    def __init__(self, message: str, file_path: str = None):
        super().__init__(message, details={'file_path': file_path})
        self.file_path = file_path


# =============================================================================
# Core/File Exceptions
# =============================================================================

class CoreError(LocForgeError):
    """Base exception for core module errors."""
    pass


class FileOperationError(CoreError):
    """Raised when a file operation (read/write) fails."""

    def __init__(self, message: str, file_path: str = None, operation: str = None):
        super().__init__(message, details={'file_path': file_path, 'operation': operation})
        self.file_path = file_path
        self.operation = operation


class LocaleInUseError(CoreError):
    """Raised when deleting the locale the game is currently configured to use."""

    def __init__(self, message: str, locale: str = None):
        super().__init__(message, details={'locale': locale})
        self.locale = locale


# =============================================================================
# Settings Exceptions
# =============================================================================

class SettingsError(LocForgeError):
    """Base exception for settings-related errors."""
    pass


class SettingsSaveError(SettingsError):
    """Raised when saving settings fails."""
    pass
