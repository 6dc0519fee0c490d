"""
Pronto Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .deployment import (
    DatabaseChoice,
    DeploymentRequest,
    ConnectionStrings,
    DeploymentResult,
)
from .results import (
    OnboardingState,
    OnboardingResult,
)

__all__ = [
    # Deployment
    "DatabaseChoice",
    "DeploymentRequest",
    "ConnectionStrings",
    "DeploymentResult",
    # Results
    "OnboardingState",
    "OnboardingResult",
]
