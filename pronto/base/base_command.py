"""
Base Command Class

Abstract base for Pronto CLI commands.
Provides logging, output helpers and error-to-exit-code translation.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from rich.console import Console

from pronto.config import Settings, load_settings
from pronto.constants import EXIT_CANCELLED, EXIT_FAILURE
from pronto.exceptions import OperationCancelled, ProntoError
from pronto.logger import DeployLogger


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Settings and logger initialization
    - Console and error console
    - JSON output support
    - Consistent error handling
    """

    def __init__(
        self,
        verbose: bool = False,
        json_output: bool = False,
        settings: Optional[Settings] = None,
    ):
        self.verbose = verbose
        self.json_output = json_output
        self.console = Console()
        self.error_console = Console(stderr=True)
        self.settings = settings or load_settings()
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, command_name: str) -> Optional[DeployLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            command_name: Command name

        Returns:
            DeployLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = DeployLogger(
            self.settings.log_dir, command_name, verbose=self.verbose, output=self.console
        )
        return self.logger

    def output_json(self, data: Dict[str, Any]) -> None:
        """Output data as JSON."""
        print(json.dumps(data, indent=2))

    def print_error(self, message: str, context: Optional[str] = None) -> None:
        """Print error message to stderr."""
        if self.json_output:
            error_data: Dict[str, Any] = {"error": message}
            if context:
                error_data["context"] = context
            self.error_console.print_json(data=error_data)
            return
        self.error_console.print(f"\n[bold red]✗ {message}[/bold red]", highlight=False)
        if context:
            self.error_console.print(f"  [color(208)]{context}[/color(208)]", highlight=False)

    def _log_saved(self) -> None:
        if self.logger and self.logger.log_path:
            self.error_console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Every error is fatal: it is reported on stderr, recorded in the log
        and turned into a non-zero exit.
        """
        try:
            self.execute(**kwargs)
        except (KeyboardInterrupt, OperationCancelled) as e:
            self.error_console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.logger.log_error(
                    "Operation cancelled by user", context=getattr(e, "context", None)
                )
            self._log_saved()
            raise SystemExit(EXIT_CANCELLED)
        except SystemExit:
            raise
        except ProntoError as e:
            self.print_error(e.message, e.context)
            if self.logger:
                self.logger.log_error(e.message, context=e.context)
            self._log_saved()
            raise SystemExit(EXIT_FAILURE)
        except Exception as e:
            error_type = type(e).__name__
            self.print_error(f"{error_type}: {e}")
            if self.logger:
                self.logger.log_error(f"{error_type}: {e}")
            self._log_saved()
            raise SystemExit(EXIT_FAILURE)
        finally:
            if self.logger:
                self.logger.close()
