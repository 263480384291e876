# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Registration error taxonomy.

Controllers translate these into HTTP responses; nothing below the service
layer knows about status codes.
"""

from typing import Dict, Optional


class RegistrationError(Exception):
    """Base class for every error raised by the registration engine."""


class InvalidArgument(RegistrationError):
    """The candidate payload is absent or is not a JSON object."""


class ValidationFailed(RegistrationError):
    """One or more field constraints were violated.

    ``errors`` maps the JSON property name (``name``, ``email``,
    ``phoneNumber``) to a single human-readable message.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(
            "Validation failed: "
            + ", ".join(f"{field}: {msg}" for field, msg in sorted(self.errors.items()))
        )


class EmailAlreadyExists(RegistrationError):
    """Another member already owns this email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email already exists: {email}")


class IdNotAllowed(RegistrationError):
    """The candidate arrived with an id; ids are only ever issued by the sequence."""

    def __init__(self, member_id):
        self.member_id = member_id
        super().__init__(
            "ID must not be set for new member registration. It will be auto-generated."
        )


class StoreUnavailable(RegistrationError):
    """The backing store could not complete an operation. Safe to retry."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)


class PersistenceError(StoreUnavailable):
    """A member read or write failed for a reason other than a uniqueness clash."""


class DuplicateKey(Exception):
    """Raised by the member store when a unique constraint rejects an insert."""

    def __init__(self, message: str, email: Optional[str] = None):
        self.email = email
        super().__init__(message)
