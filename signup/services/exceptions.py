"""Provides exceptions occurring with external services."""


class RegistrationFailed(RuntimeError):
    """The account service did not create the account."""


class EmailAlreadyInUse(RuntimeError):
    """An account with this email address is already recorded."""


class StorageFailed(RuntimeError):
    """Failed to read from or write to the key-value store."""


class MalformedRecord(ValueError):
    """A stored record could not be decoded."""
