"""
Revision history ledger for credential records.

Each record carries an append-only list of HistoryEntry objects. Entry 0 is
the seed written at registration (old state is empty), every later entry is a
revision diffed from the record's state at the moment of the update, so the
chain history[i].new_state == history[i + 1].old_state always holds.
"""

import datetime
from dataclasses import dataclass
from typing import List, Optional, Sequence


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a Z suffix."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class StateSnapshot:
    """The tracked part of a record at one point in time."""
    password: str = ""
    memo: str = ""


@dataclass(frozen=True)
class HistoryEntry:
    """A single before/after transition."""
    old_state: StateSnapshot
    new_state: StateSnapshot
    updated_at: str


def seed_entry(password: str, memo: str, now: Optional[str] = None) -> HistoryEntry:
    """Entry written when a record is first registered."""
    return HistoryEntry(
        old_state=StateSnapshot("", ""),
        new_state=StateSnapshot(password, memo),
        updated_at=now or now_iso()
    )


def revision_entry(current, password: str, memo: str, now: Optional[str] = None) -> HistoryEntry:
    """
    Entry describing an update of `current` to the given password and memo.

    Args:
        current: The record as it is before the update is applied
        password: Incoming password
        memo: Incoming memo
        now: Timestamp override, defaults to the current time

    Returns:
        HistoryEntry whose old state is the record's current state
    """
    return HistoryEntry(
        old_state=StateSnapshot(current.password, current.memo),
        new_state=StateSnapshot(password, memo),
        updated_at=now or now_iso()
    )


def verify_chain(history: Sequence[HistoryEntry]) -> bool:
    """Check that each entry starts where the previous one ended."""
    for previous, following in zip(history, history[1:]):
        if previous.new_state != following.old_state:
            return False
    return True


def visible_revisions(history: Sequence[HistoryEntry]) -> List[HistoryEntry]:
    """Revisions shown to the user; the registration seed is left out."""
    return list(history[1:])
