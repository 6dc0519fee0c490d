"""
Deploy Command

Walk the user from a Compose token to a running database and a saved
CA certificate.
"""

from dataclasses import dataclass
from typing import Optional

import rich_click as click

from pronto import __version__
from pronto.api_client import ComposeClient
from pronto.base import BaseCommand
from pronto.cancellation import CancellationToken, cancel_on_interrupt
from pronto.config import Settings
from pronto.config_store import ConfigStore
from pronto.orchestrator import DeploymentOrchestrator
from pronto.prompts import Prompter, TerminalPrompter
from pronto.ui_components import show_summary


@dataclass
class DeployOptions:
    """Options for deploy command."""

    input: Optional[str] = None


class DeployCommand(BaseCommand):
    """
    Deploy a database on Compose.

    Features:
    - Token prompt on first run, stored for later runs
    - Database picker
    - Certificate written next to the user
    """

    def __init__(
        self,
        options: DeployOptions,
        verbose: bool = False,
        json_output: bool = False,
        settings: Optional[Settings] = None,
        prompter: Optional[Prompter] = None,
        client: Optional[ComposeClient] = None,
    ):
        super().__init__(verbose=verbose, json_output=json_output, settings=settings)
        self.options = options
        # JSON mode keeps stdout clean for the result
        prompt_console = self.error_console if json_output else self.console
        self.prompter = prompter or TerminalPrompter(console=prompt_console)
        self.client = client or ComposeClient(
            base_url=self.settings.api_url, timeout=self.settings.http_timeout
        )

    def execute(self) -> None:
        """Execute deploy command."""
        logger = self.init_logger("deploy")
        if logger:
            logger.log(f"API: {self.settings.api_url}")
            if self.options.input:
                logger.log(f"Ignoring input argument: {self.options.input}", "DEBUG")

        token = CancellationToken()
        orchestrator = DeploymentOrchestrator(
            store=ConfigStore(self.settings.config_path),
            client=self.client,
            prompter=self.prompter,
            cancel_token=token,
            logger=logger,
        )

        with cancel_on_interrupt(token):
            result = orchestrator.run()

        if self.json_output:
            self.output_json(result.to_dict())
        else:
            show_summary(result, console=self.console)


@click.command(name="pronto")
@click.argument("input", required=False)
@click.option("--verbose", "-v", is_flag=True, help="Show all log output")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON")
@click.version_option(version=__version__)
def deploy(input, verbose, json_output):
    """
    Deploy a database on Compose in seconds.

    \b
    Examples:
      pronto            # Pick a database and deploy it
      pronto --json     # Same, but print the result as JSON
    """
    options = DeployOptions(input=input)
    cmd = DeployCommand(options, verbose=verbose, json_output=json_output)
    cmd.run()
