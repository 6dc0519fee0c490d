"""
Pronto - UI Components
Pointer lines, progress spinner and the final summary
"""

from contextlib import contextmanager
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.text import Text

from pronto.models import OnboardingResult

# Color scheme
BRAND_COLOR = "cyan"
SUCCESS_COLOR = "green"
ERROR_COLOR = "red"
INFO_COLOR = "blue"
MUTED_COLOR = "grey50"

POINTER = "❯"
TICK = "✓"
CROSS = "✗"
INFO = "ℹ"


def pointer(message: str, color: str = INFO_COLOR, console: Optional[Console] = None):
    """Print a message behind a colored pointer glyph."""
    console = console or Console()
    console.print(f"[{color}]{POINTER}[/{color}] {message}")


@contextmanager
def progress(description: str, done: str, console: Optional[Console] = None):
    """
    Show a spinner while the block runs.

    The spinner line is replaced with a tick and `done` on success, or a
    cross and `description` if the block raises.
    """
    console = console or Console()
    spinner = Spinner("dots", text=f"[{BRAND_COLOR}]{description}[/{BRAND_COLOR}]")

    with Live(spinner, console=console, refresh_per_second=10) as live:
        try:
            yield
        except BaseException:
            failed = Text(f"{CROSS} ", style=ERROR_COLOR)
            failed.append(description, style="dim")
            live.update(failed)
            raise
        succeeded = Text(f"{TICK} ", style=SUCCESS_COLOR)
        succeeded.append(done)
        live.update(succeeded)


def show_summary(result: OnboardingResult, console: Optional[Console] = None):
    """Print connection details and certificate location."""
    console = console or Console()
    console.print()
    console.print(f"[{INFO_COLOR}]{INFO}[/{INFO_COLOR}] Connect via CLI:")
    console.print(f"  {result.cli_connection}", markup=False, highlight=False)
    console.print()
    console.print(f"[{INFO_COLOR}]{INFO}[/{INFO_COLOR}] Connect directly:")
    console.print(f"  {result.direct_connection}", markup=False, highlight=False)
    console.print()
    console.print(
        f"[{INFO_COLOR}]{INFO}[/{INFO_COLOR}] Certificate saved at "
        f"[bold]{result.certificate_path}[/bold] in the current directory"
    )
    console.print()
