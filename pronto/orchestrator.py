"""
Deployment Orchestrator

Runs the onboarding flow as a forward-only state machine:

    NO_TOKEN -> AWAITING_TOKEN -> HAS_TOKEN -> SELECTING_DATABASE
             -> DEPLOYING -> WRITING_CERTIFICATE -> DONE

A stored token skips straight to HAS_TOKEN. The cancellation token is
checked before every transition. Nothing is rolled back: a failure after
DEPLOYING leaves the remote deployment in place.
"""

from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from pronto.api_client import ComposeClient
from pronto.cancellation import CancellationToken
from pronto.config_store import ConfigStore
from pronto.constants import CERTIFICATE_SUFFIX, TOKEN_KEY
from pronto.databases import DATABASES
from pronto.exceptions import CertificateWriteError, ValidationError
from pronto.logger import DeployLogger
from pronto.models import (
    DatabaseChoice,
    DeploymentResult,
    OnboardingResult,
    OnboardingState,
)
from pronto.models.results import STATE_ORDER
from pronto.names import deployment_name
from pronto.prompts import Prompter


class DeploymentOrchestrator:
    """Sequences token, database choice, deployment and certificate."""

    def __init__(
        self,
        store: ConfigStore,
        client: ComposeClient,
        prompter: Prompter,
        output_dir: Optional[Path] = None,
        name_factory: Optional[Callable[[str], str]] = None,
        cancel_token: Optional[CancellationToken] = None,
        logger: Optional[DeployLogger] = None,
        databases: Sequence[DatabaseChoice] = DATABASES,
    ):
        """
        Initialize orchestrator.

        Args:
            store: Credential store holding the Compose token
            client: Compose API client
            prompter: Source of the token and database choice
            output_dir: Where the certificate is written (working directory by default)
            name_factory: Builds a deployment name from a database type (random word by default)
            cancel_token: Checked between steps
            logger: DeployLogger, or None to skip file logging
            databases: Choices offered to the prompter
        """
        self.store = store
        self.client = client
        self.prompter = prompter
        self.output_dir = Path(output_dir) if output_dir is not None else Path(".")
        self.name_factory = name_factory or deployment_name
        self.cancel_token = cancel_token or CancellationToken()
        self.logger = logger
        self.databases = list(databases)
        self.state: Optional[OnboardingState] = None

    def _advance(self, state: OnboardingState) -> None:
        self.cancel_token.raise_if_cancelled(state.value)

        if self.state is not None and STATE_ORDER.index(state) <= STATE_ORDER.index(
            self.state
        ):
            raise RuntimeError(
                f"Invalid transition {self.state.value} -> {state.value}"
            )

        self.state = state
        if self.logger:
            self.logger.log(f"State: {state.value}", "DEBUG")

    def resolve_token(self) -> str:
        """Return the stored token, asking for and persisting one if absent."""
        if self.logger:
            self.logger.step("Resolving Compose token")

        token = self.store.get(TOKEN_KEY)
        if token:
            self._advance(OnboardingState.HAS_TOKEN)
            if self.logger:
                self.logger.log(f"Using token stored in {self.store.path}")
            return token

        self._advance(OnboardingState.NO_TOKEN)
        self._advance(OnboardingState.AWAITING_TOKEN)

        token = (self.prompter.request_token() or "").strip()
        if not token:
            raise ValidationError("A Compose token is required")

        self.store.set(TOKEN_KEY, token)
        if self.logger:
            self.logger.success(f"Token saved to {self.store.path}")

        self._advance(OnboardingState.HAS_TOKEN)
        return token

    def select_database(self) -> Tuple[DatabaseChoice, str]:
        """Ask for a database and name the deployment after it."""
        self._advance(OnboardingState.SELECTING_DATABASE)
        if self.logger:
            self.logger.step("Selecting database")

        value = self.prompter.choose_database(self.databases)
        database = next((db for db in self.databases if db.value == value), None)
        if database is None:
            raise ValidationError(
                f"Unknown database type '{value}'",
                context=f"Available: {', '.join(db.value for db in self.databases)}",
            )

        name = self.name_factory(database.value)
        if self.logger:
            self.logger.log(f"Database: {database.name}, deployment name: {name}")
        return database, name

    def deploy(self, token: str, database: DatabaseChoice, name: str) -> DeploymentResult:
        """Resolve the account id, then create the deployment."""
        self._advance(OnboardingState.DEPLOYING)
        if self.logger:
            self.logger.step(f"Deploying {database.name}")

        with self.prompter.deploying(database):
            account_id = self.client.fetch_account_id(token)
            if self.logger:
                self.logger.log(f"Account id: {account_id}")

            self.cancel_token.raise_if_cancelled("create_deployment")
            result = self.client.create_deployment(token, account_id, database.value, name)

        if self.logger:
            self.logger.success(f"Deployment '{name}' created")
        return result

    def write_certificate(self, name: str, result: DeploymentResult) -> Path:
        """Save the decoded CA certificate as <name>.crt, overwriting silently."""
        self._advance(OnboardingState.WRITING_CERTIFICATE)
        if self.logger:
            self.logger.step("Writing certificate")

        path = self.output_dir / f"{name}{CERTIFICATE_SUFFIX}"
        try:
            path.write_bytes(result.ca_certificate)
        except OSError as e:
            raise CertificateWriteError(str(path), name, e.strerror or str(e))

        if self.logger:
            self.logger.success(f"Certificate saved at {path}")
        return path

    def run(self) -> OnboardingResult:
        """Run the whole flow and return what the caller should display."""
        try:
            token = self.resolve_token()
            database, name = self.select_database()
            result = self.deploy(token, database, name)
            path = self.write_certificate(name, result)
        except KeyboardInterrupt:
            # Ctrl-C unblocked a prompt or request; stop where the flow stands
            self.cancel_token.cancel()
            state = self.state or OnboardingState.NO_TOKEN
            self.cancel_token.raise_if_cancelled(state.value)

        self._advance(OnboardingState.DONE)
        return OnboardingResult(
            deployment_name=name,
            database=database,
            deployment=result,
            certificate_path=path,
        )
