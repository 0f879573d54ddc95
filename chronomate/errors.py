"""Shared error types for chronomate.

Backend failures are raised by providers and handled by the response composer;
store-side rejections are raised by the store and reported by the executor.
"""


class ChronomateError(Exception):
    """Base error for chronomate."""


class ProviderCallError(ChronomateError):
    """Generative backend call failed (network/auth/model/etc.)."""


class ActionError(ChronomateError):
    """The store rejected an action (unknown kind, missing or invalid data)."""
