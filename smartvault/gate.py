"""
PIN-gated deferred actions.

The gate holds at most one pending action. A correct PIN releases it to the
dispatcher exactly once; a wrong PIN keeps it pending so the user can retry.

DEMO NOTICE:
The unlock secret is a fixed shared PIN. It is a confirmation step for a demo,
not an authentication mechanism.
"""

import hmac
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Callable, Optional, Any

from smartvault import config

logger = logging.getLogger(__name__)


class ActionKind(Enum):
    """Operations that require the PIN."""
    EDIT = "edit"
    DELETE = "delete"
    VIEW_DETAILS = "view_details"
    VIEW_HISTORY = "view_history"


GATE_TITLES = {
    ActionKind.EDIT: config.GATE_TITLE_EDIT,
    ActionKind.DELETE: config.GATE_TITLE_DELETE,
    ActionKind.VIEW_DETAILS: config.GATE_TITLE_VIEW_DETAILS,
    ActionKind.VIEW_HISTORY: config.GATE_TITLE_VIEW_HISTORY,
}


@dataclass(frozen=True)
class GuardedAction:
    """A pending operation on one record."""
    kind: ActionKind
    record_id: str
    title: str = ""

    @classmethod
    def for_kind(cls, kind: ActionKind, record_id: str) -> 'GuardedAction':
        """Build an action with the standard dialog title for its kind."""
        return cls(kind=kind, record_id=record_id, title=GATE_TITLES[kind])


class ActionGate:
    """Single-slot confirmation gate."""

    def __init__(self, secret: str, dispatcher: Callable[[GuardedAction], Any]):
        """
        Args:
            secret: Value that confirm() must receive to release the action
            dispatcher: Called with the released action, once per successful confirm
        """
        self._secret = secret
        self._dispatcher = dispatcher
        self._pending: Optional[GuardedAction] = None
        self._error = ""

    @property
    def pending(self) -> Optional[GuardedAction]:
        return self._pending

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    @property
    def title(self) -> str:
        return self._pending.title if self._pending else ""

    @property
    def error(self) -> str:
        return self._error

    def request_action(self, action: GuardedAction) -> None:
        """Store an action, replacing any action already waiting."""
        if self._pending is not None:
            logger.debug(f"Discarding pending {self._pending.kind.value} for {self._pending.record_id}")
        self._pending = action
        self._error = ""
        logger.debug(f"Gate waiting for PIN: {action.kind.value} on {action.record_id}")

    def confirm(self, secret: str) -> bool:
        """
        Check the PIN and release the pending action.

        Returns:
            True if the action was dispatched, False on a wrong PIN or an empty gate
        """
        if self._pending is None:
            return False

        if not hmac.compare_digest(secret.encode('utf-8'), self._secret.encode('utf-8')):
            self._error = config.PIN_ERROR_MESSAGE
            logger.info(f"Wrong PIN for {self._pending.kind.value}")
            return False

        action = self._pending
        self._pending = None
        self._error = ""
        self._dispatcher(action)
        return True

    def cancel(self) -> None:
        """Drop the pending action without running it."""
        self._pending = None
        self._error = ""
