"""
Focus and live-region feedback for the sign-up form.

Whenever errors are shown, exactly one place on the form receives focus: the
first field with a problem, in the order the fields appear on the page. Status
changes are announced through a live region. Announcements about validation,
progress and failure clear themselves after a few seconds so that the same
message can be announced again on the next attempt.
"""

import asyncio
from typing import Callable, Dict, Optional

from .. import config, logging
from ..domain import FormErrors

logger = logging.getLogger(__name__)

FOCUS_ORDER = ('name', 'email', 'password', 'confirm_password', 'general')
"""Fields in the order they appear on the form."""


def focus_target(errors: FormErrors) -> Optional[str]:
    """The field that should receive focus, or None if there are no errors."""
    for field in FOCUS_ORDER:
        if getattr(errors, field) is not None:
            return field
    return None


def field_attributes(errors: FormErrors, field: str) -> Dict[str, Optional[str]]:
    """ARIA attributes for the input of ``field``."""
    invalid = getattr(errors, field) is not None
    return {
        'aria-invalid': 'true' if invalid else 'false',
        'aria-describedby': (
            f"{field.replace('_', '-')}-error" if invalid else None
        )
    }


class StatusAnnouncer(object):
    """
    Holds the message exposed through the form's live region.

    Parameters
    ----------
    on_change : callable
        Called with the new message (or None) every time it changes.
    timeout : float
        Seconds before a transient message is cleared.

    """

    def __init__(self,
                 on_change: Optional[Callable[[Optional[str]], None]] = None,
                 timeout: float = config.STATUS_MESSAGE_TIMEOUT) -> None:
        self.message: Optional[str] = None
        self.timeout = timeout
        self._on_change = on_change
        self._timer: Optional[asyncio.TimerHandle] = None

    def announce(self, message: str, transient: bool = True) -> None:
        """
        Replace the current message.

        Must be called from a running event loop when ``transient`` is set,
        since clearing is scheduled on that loop.
        """
        self._cancel()
        self._set(message)
        if transient:
            loop = asyncio.get_running_loop()
            self._timer = loop.call_later(self.timeout, self.clear)

    def clear(self) -> None:
        """Remove the current message."""
        self._cancel()
        if self.message is not None:
            self._set(None)

    def close(self) -> None:
        """Stop any pending clear; the message is left as it is."""
        self._cancel()

    def _cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _set(self, message: Optional[str]) -> None:
        self.message = message
        logger.debug('Status message: %s', message)
        if self._on_change is not None:
            self._on_change(message)
