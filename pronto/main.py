#!/usr/bin/env python3
"""Pronto CLI - Main entry point"""

import functools
import os
import sys

import rich_click as click
from rich.console import Console

from pronto.constants import EXIT_CANCELLED, EXIT_FAILURE
from pronto.exceptions import ProntoError

# Configure rich-click help output
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.MAX_WIDTH = 100

click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.ALIGN_ERRORS_PANEL = "left"
click.rich_click.ERRORS_EPILOGUE = ""

from pronto.commands.deploy import deploy  # noqa: E402

error_console = Console(stderr=True)


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""
    from click.exceptions import ClickException

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except KeyboardInterrupt:
            error_console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(EXIT_CANCELLED)
        except ProntoError as e:
            error_console.print(f"\n[bold red]✗ Error:[/bold red] {e.message}")
            if e.context:
                error_console.print(f"  [color(208)]{e.context}[/color(208)]")
            sys.exit(EXIT_FAILURE)
        except Exception as e:
            error_console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                error_console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(EXIT_FAILURE)

    return wrapper


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    deploy()


if __name__ == "__main__":
    main()
