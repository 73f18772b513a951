"""Common exceptions for Conduit.

This module contains reusable exception classes that can be used
across different services and modules. HTTP-facing errors live in
``conduit.router.errors``; event bus errors live in ``conduit.events.core``.
"""


class ConfigurationError(Exception):
    """Raised when the application is wired up inconsistently.

    Examples are an unknown storage backend name or a handler module
    exporting something the router cannot use.
    """


class DuplicateUserError(Exception):
    """Raised when a user store is asked to create a user that already exists."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User already exists: {email}")
