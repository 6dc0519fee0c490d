"""
Interactive prompts

The orchestrator only talks to a Prompter; TerminalPrompter is the one the
CLI uses.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Sequence

import click
import inquirer
from rich.console import Console
from rich.prompt import Prompt

from pronto.constants import TOKEN_URL
from pronto.models import DatabaseChoice
from pronto.ui_components import MUTED_COLOR, pointer, progress


class Prompter(ABC):
    """Collects user input for the orchestrator."""

    @abstractmethod
    def request_token(self) -> str:
        """Ask the user for a Compose access token."""

    @abstractmethod
    def choose_database(self, choices: Sequence[DatabaseChoice]) -> str:
        """Return the value of the chosen database."""

    @contextmanager
    def deploying(self, database: DatabaseChoice):
        """Wraps the two API calls; override to show progress."""
        yield


class TerminalPrompter(Prompter):
    """Prompts on the terminal with rich and inquirer."""

    def __init__(self, console: Console = None, open_browser: bool = True):
        self.console = console or Console()
        self.open_browser = open_browser

    def request_token(self) -> str:
        pointer(
            "To use Pronto, you need to enter your Compose access token",
            color=MUTED_COLOR,
            console=self.console,
        )
        pointer(
            "Press Enter to open a browser and create a token",
            color=MUTED_COLOR,
            console=self.console,
        )
        self.console.input()

        if self.open_browser:
            click.launch(TOKEN_URL)
        self.console.print(f"[dim]{TOKEN_URL}[/dim]")

        token = ""
        while not token:
            token = Prompt.ask("Enter Compose token", console=self.console).strip()
        return token

    def choose_database(self, choices: Sequence[DatabaseChoice]) -> str:
        questions = [
            inquirer.List(
                "database",
                message="Select a database to deploy",
                choices=[(choice.name, choice.value) for choice in choices],
            )
        ]
        answers = inquirer.prompt(questions, raise_keyboard_interrupt=True)
        return answers["database"]

    @contextmanager
    def deploying(self, database: DatabaseChoice):
        with progress(f"Deploying {database.name}", "Deployed", console=self.console):
            yield
