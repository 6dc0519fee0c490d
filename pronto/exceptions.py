"""
Pronto Exception Hierarchy

Every failure in the onboarding flow is fatal; these types only tell the
user which step broke.
"""

from typing import Optional


class ProntoError(Exception):
    """Base exception for all Pronto errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(ProntoError):
    """Raised when settings are invalid."""

    pass


class ValidationError(ProntoError):
    """Raised when user input is unusable."""

    pass


class CredentialStoreError(ProntoError):
    """Raised when the credential store cannot be read or written."""

    pass


class IdentityLookupError(ProntoError):
    """Raised when the account id cannot be fetched."""

    pass


class DeploymentError(ProntoError):
    """Raised when the deployment request fails."""

    pass


class CertificateWriteError(ProntoError):
    """Raised when the CA certificate cannot be saved.

    The deployment already exists remotely at this point.
    """

    def __init__(self, path: str, deployment_name: str, reason: str):
        self.path = path
        self.deployment_name = deployment_name
        message = f"Could not write certificate to {path}: {reason}"
        context = f"Deployment '{deployment_name}' was created but has no local certificate"
        super().__init__(message, context)


class OperationCancelled(ProntoError):
    """Raised when the user aborts the flow."""

    def __init__(self, state: str):
        self.state = state
        super().__init__("Operation cancelled by user", context=f"Stopped at {state}")
