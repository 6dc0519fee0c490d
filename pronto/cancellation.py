"""
Cooperative cancellation for the onboarding flow

Ctrl-C cancels the token and raises KeyboardInterrupt so a blocked prompt
or request returns at once. The orchestrator then stops through its
boundary check, which raises OperationCancelled naming the state reached.
Calling cancel() directly stops the flow at the next state boundary.
"""

import signal
import threading
from contextlib import contextmanager

from pronto.exceptions import OperationCancelled


class CancellationToken:
    """Flag checked at each state boundary of the flow."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, next_step: str) -> None:
        if self._event.is_set():
            raise OperationCancelled(next_step)


@contextmanager
def cancel_on_interrupt(token: CancellationToken):
    """
    Cancel the token on Ctrl-C.

    The interrupt is still raised to unblock the current call. Nothing is
    rolled back.
    """

    def _handle_signal(signum, frame):
        token.cancel()
        raise KeyboardInterrupt

    installed = False
    try:
        previous = signal.signal(signal.SIGINT, _handle_signal)
        installed = True
    except (ValueError, OSError):
        pass  # Not in main thread, default handling applies

    try:
        yield token
    finally:
        if installed:
            signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)
