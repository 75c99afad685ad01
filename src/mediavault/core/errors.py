"""Exception types raised by MediaVault components."""


class VaultError(Exception):
    """Base class for vault errors."""

    pass


class VaultDataError(VaultError):
    """Raised when a persisted vault value cannot be decoded."""

    pass


class PersistenceError(VaultError):
    """Raised when the persistence backend fails to read or write."""

    pass


class PickerCancelled(VaultError):
    """Raised by a picker when the user dismisses it without choosing."""

    pass
