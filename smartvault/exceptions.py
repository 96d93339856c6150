"""
Exception types raised by SmartVault.
"""


class SmartVaultError(Exception):
    """Base class for all SmartVault errors."""


class ValidationError(SmartVaultError):
    """A required record field is missing."""


class DuplicateRecordError(SmartVaultError):
    """A record with the same id already exists in the store."""


class SnapshotError(SmartVaultError):
    """A snapshot file could not be written or read."""
