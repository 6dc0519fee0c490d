"""
Result Models

State and outcome of one onboarding run.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from .deployment import DatabaseChoice, DeploymentResult


class OnboardingState(Enum):
    """Position in the onboarding flow. Only moves forward."""

    NO_TOKEN = "no_token"
    AWAITING_TOKEN = "awaiting_token"
    HAS_TOKEN = "has_token"
    SELECTING_DATABASE = "selecting_database"
    DEPLOYING = "deploying"
    WRITING_CERTIFICATE = "writing_certificate"
    DONE = "done"


STATE_ORDER = list(OnboardingState)


@dataclass
class OnboardingResult:
    """What a finished run hands back for display."""

    deployment_name: str
    database: DatabaseChoice
    deployment: DeploymentResult
    certificate_path: Path

    @property
    def cli_connection(self) -> str:
        return self.deployment.connection_strings.first_cli

    @property
    def direct_connection(self) -> str:
        return self.deployment.connection_strings.first_direct

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "deployment_name": self.deployment_name,
            "database": {"name": self.database.name, "type": self.database.value},
            "certificate_path": str(self.certificate_path),
            "connection_strings": {
                "cli": self.cli_connection,
                "direct": self.direct_connection,
            },
        }
