"""
Error taxonomy for lesson-plan generation.

Every error carries a user-facing message (Indonesian, like the rest of the UI).
The coordinator recovers all of them; none is fatal to the process.
"""


class RppError(Exception):
    """Base class for recoverable generation errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CredentialMissing(RppError):
    """No usable API credential for the selected settings mode."""


class ServiceError(RppError):
    """The Gemini call failed or returned a non-success result."""


class ParseError(RppError):
    """The response text was not valid JSON."""


class ValidationError(RppError):
    """A payload does not match the expected contract."""


class IncompleteForm(ValidationError):
    """Required form fields are empty."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__("Lengkapi isian berikut: " + ", ".join(self.missing))
