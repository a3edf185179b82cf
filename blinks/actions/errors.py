"""
Error taxonomy for action resolution and transaction building.

Every error carries the HTTP status it maps to, so the API layer can report
it without re-classifying:

- validation errors (400) are user-correctable,
- not-found (404) is reported distinctly from validation,
- domain and infrastructure errors (500) mean the whole request must be
  re-issued; nothing is retried internally.
"""


class BlinkError(Exception):
    """Base class for all blink errors."""
    status_code = 500


class ValidationError(BlinkError):
    """User input that cannot be turned into a transaction."""
    status_code = 400


class InvalidAddress(ValidationError):
    """A wallet address failed to parse as a Solana public key."""

    def __init__(self, name: str, reason: str = ""):
        self.name = name
        self.reason = reason
        message = f"Invalid {name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MissingAmount(ValidationError):
    def __init__(self):
        super().__init__("Missing or invalid amount")


class MissingSelection(ValidationError):
    def __init__(self):
        super().__init__("Missing selection")


class BlinkNotFound(BlinkError):
    status_code = 404

    def __init__(self, blink_id: str):
        self.blink_id = blink_id
        super().__init__("Blink not found")


class InvalidConfiguration(BlinkError):
    """Stored config does not match the blink type."""

    def __init__(self, message: str = "Invalid vote config"):
        super().__init__(message)


class InfrastructureError(BlinkError):
    """Failure of a collaborator (storage, RPC) or of serialization."""


class FreshnessTokenUnavailable(InfrastructureError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"RPC Error: {reason}")


class EncodingFailure(InfrastructureError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Serialization error: {reason}")


class DatabaseError(InfrastructureError):
    """Database operation error."""
    pass
