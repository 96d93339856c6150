"""
Application state for one vault session.

VaultSession owns what the main window shows: the search term, the AI status
message, the PIN gate and the record currently open in a dialog. The UI reads
from it and forwards user events to it; it never mutates the store directly.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from smartvault import config
from smartvault.ai import GeminiClient, QueryExpansion, PasswordAnalysis, expand_query, analyze_password
from smartvault.exceptions import ValidationError
from smartvault.gate import ActionGate, ActionKind, GuardedAction
from smartvault.search import visible_records
from smartvault.storage import RecordStore, RecordInput, CredentialRecord

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    NONE = "none"
    EDITING = "editing"
    DETAILS = "details"
    HISTORY = "history"


def validate_input(record: RecordInput) -> None:
    """
    Presence checks done before a record reaches the store.

    Raises:
        ValidationError: If site name, username or password is empty
    """
    if not record.site_name.strip():
        raise ValidationError("Site name is required")
    if not record.username.strip():
        raise ValidationError("Username is required")
    if not record.password:
        raise ValidationError("Password is required")


class VaultSession:
    """UI state orchestration around a RecordStore."""

    def __init__(self, store: Optional[RecordStore] = None, secret: Optional[str] = None,
                 client: Optional[GeminiClient] = None):
        self.store = store if store is not None else RecordStore()
        self.client = client if client is not None else GeminiClient()
        self.gate = ActionGate(config.UNLOCK_PIN if secret is None else secret, self._perform)
        self.search_term = ""
        self.status_message = ""
        self.current_record: Optional[CredentialRecord] = None
        self.mode = ViewMode.NONE

    # Listing and search

    def visible_records(self) -> List[CredentialRecord]:
        return visible_records(self.store.records(), self.search_term)

    def set_search_term(self, term: str) -> None:
        self.search_term = term

    def replace_records(self, records: Iterable[CredentialRecord]) -> None:
        """Swap in a new record set, e.g. from a snapshot or the demo data."""
        self.store.load(records)
        self.close_view()

    def reset_search(self) -> None:
        self.search_term = ""
        self.status_message = ""

    # Mutations

    def register(self, new_record: RecordInput) -> CredentialRecord:
        validate_input(new_record)
        record = self.store.register(new_record)
        self.close_view()
        return record

    def submit_edit(self, updated: RecordInput) -> bool:
        """
        Apply the edit form to the record being edited.

        Returns:
            False if the record disappeared while the form was open
        """
        validate_input(updated)
        if updated.id is None and self.current_record is not None:
            updated.id = self.current_record.id
        ok = self.store.update(updated)
        self.close_view()
        return ok

    # Gated actions

    def request_edit(self, record_id: str) -> bool:
        # Nothing to unlock if the record is already gone.
        if record_id not in self.store:
            return False
        self.gate.request_action(GuardedAction.for_kind(ActionKind.EDIT, record_id))
        return True

    def request_delete(self, record_id: str) -> None:
        self.gate.request_action(GuardedAction.for_kind(ActionKind.DELETE, record_id))

    def request_view_details(self, record_id: str) -> None:
        self.gate.request_action(GuardedAction.for_kind(ActionKind.VIEW_DETAILS, record_id))

    def request_view_history(self, record_id: str) -> None:
        self.gate.request_action(GuardedAction.for_kind(ActionKind.VIEW_HISTORY, record_id))

    def confirm_pin(self, pin: str) -> bool:
        return self.gate.confirm(pin)

    def cancel_pin(self) -> None:
        self.gate.cancel()

    def close_view(self) -> None:
        self.current_record = None
        self.mode = ViewMode.NONE

    def _perform(self, action: GuardedAction) -> None:
        """Run an action released by the gate."""
        logger.info(f"Performing {action.kind.value} on {action.record_id}")
        if action.kind is ActionKind.DELETE:
            self.store.remove(action.record_id)
            if self.current_record is not None and self.current_record.id == action.record_id:
                self.close_view()
            return

        record = self.store.get(action.record_id)
        if record is None:
            return
        self.current_record = record
        self.mode = {
            ActionKind.EDIT: ViewMode.EDITING,
            ActionKind.VIEW_DETAILS: ViewMode.DETAILS,
            ActionKind.VIEW_HISTORY: ViewMode.HISTORY,
        }[action.kind]

    # AI helpers, split so the UI can run the network call off the main thread

    def begin_smart_search(self) -> bool:
        """
        Set the progress message.

        Returns:
            False if there is no term to expand (the status explains why)
        """
        if not self.search_term:
            self.status_message = config.MSG_SEARCH_EMPTY
            return False
        self.status_message = config.MSG_SEARCH_PROGRESS
        return True

    def finish_smart_search(self, expansion: QueryExpansion) -> None:
        # A failed expansion leaves whatever the user has typed since.
        if expansion.changed:
            self.search_term = expansion.term
        self.status_message = expansion.message

    def smart_search(self) -> QueryExpansion:
        if not self.begin_smart_search():
            return QueryExpansion(term=self.search_term, message=self.status_message)
        expansion = expand_query(self.search_term, self.client)
        self.finish_smart_search(expansion)
        return expansion

    def begin_password_analysis(self) -> None:
        self.status_message = config.MSG_ANALYZE_PROGRESS

    def finish_password_analysis(self, analysis: PasswordAnalysis) -> None:
        self.status_message = analysis.message

    def analyze_password(self, password: str) -> PasswordAnalysis:
        self.begin_password_analysis()
        analysis = analyze_password(password, self.client)
        self.finish_password_analysis(analysis)
        return analysis
