"""
In-memory record storage for the password manager.

DEMO NOTICE:
Records live only in process memory and are not encrypted. The store is the
single writer for credential records and their revision history.
"""

import uuid
import logging
from typing import List, Dict, Optional, Any, Iterable
from dataclasses import dataclass, field

from smartvault.history import (
    HistoryEntry, StateSnapshot, seed_entry, revision_entry, now_iso
)
from smartvault.exceptions import DuplicateRecordError

logger = logging.getLogger(__name__)


@dataclass
class RecordInput:
    """Field values submitted by the add/edit form."""
    site_name: str
    username: str
    password: str
    url: str = ""
    memo: str = ""
    keyword: str = ""
    id: Optional[str] = None


@dataclass
class CredentialRecord:
    """Represents a single stored credential."""
    id: str
    site_name: str
    username: str
    password: str
    url: str = ""
    memo: str = ""
    keyword: str = ""
    created_at: str = ""
    history: List[HistoryEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary used for serialization."""
        return {
            'id': self.id,
            'siteName': self.site_name,
            'username': self.username,
            'password': self.password,
            'url': self.url,
            'memo': self.memo,
            'keyword': self.keyword,
            'createdAt': self.created_at,
            'history': [
                {
                    'oldState': {'password': h.old_state.password, 'memo': h.old_state.memo},
                    'newState': {'password': h.new_state.password, 'memo': h.new_state.memo},
                    'updatedAt': h.updated_at,
                }
                for h in self.history
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CredentialRecord':
        """Create from a camelCase dictionary."""
        history = [
            HistoryEntry(
                old_state=StateSnapshot(**h['oldState']),
                new_state=StateSnapshot(**h['newState']),
                updated_at=h['updatedAt']
            )
            for h in data.get('history', [])
        ]
        return cls(
            id=str(data['id']),
            site_name=data['siteName'],
            username=data['username'],
            password=data['password'],
            url=data.get('url', ""),
            memo=data.get('memo', ""),
            keyword=data.get('keyword', ""),
            created_at=data.get('createdAt', ""),
            history=history
        )


class RecordStore:
    """Holds credential records and is the only component that mutates them."""

    def __init__(self, records: Optional[Iterable[CredentialRecord]] = None):
        self._records: List[CredentialRecord] = []
        if records is not None:
            self.load(records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: str) -> bool:
        return self.get(record_id) is not None

    def load(self, records: Iterable[CredentialRecord]) -> None:
        """
        Replace the store contents.

        Raises:
            DuplicateRecordError: If two records share an id
        """
        records = list(records)
        seen = set()
        for record in records:
            if record.id in seen:
                raise DuplicateRecordError(f"Duplicate record id: {record.id}")
            seen.add(record.id)
        self._records = records
        logger.info(f"Loaded {len(records)} records")

    def register(self, new_record: RecordInput) -> CredentialRecord:
        """
        Add a new credential record.

        Args:
            new_record: Submitted field values; a fresh id is assigned when absent

        Returns:
            The stored record, with created_at and its seed history entry set
        """
        record_id = new_record.id or str(uuid.uuid4())
        if record_id in self:
            raise DuplicateRecordError(f"Duplicate record id: {record_id}")

        now = now_iso()
        record = CredentialRecord(
            id=record_id,
            site_name=new_record.site_name,
            username=new_record.username,
            password=new_record.password,
            url=new_record.url,
            memo=new_record.memo,
            keyword=new_record.keyword,
            created_at=now,
            history=[seed_entry(new_record.password, new_record.memo, now)]
        )
        self._records.append(record)
        logger.info(f"Registered record {record_id} ({record.site_name})")
        return record

    def update(self, updated: RecordInput) -> bool:
        """
        Update an existing record and append a revision to its history.

        Returns:
            True if the record existed, False if the id is unknown (nothing changes)
        """
        for i, record in enumerate(self._records):
            if record.id == updated.id:
                entry = revision_entry(record, updated.password, updated.memo)
                self._records[i] = CredentialRecord(
                    id=record.id,
                    site_name=updated.site_name,
                    username=updated.username,
                    password=updated.password,
                    url=updated.url,
                    memo=updated.memo,
                    keyword=updated.keyword,
                    created_at=record.created_at,
                    history=record.history + [entry]
                )
                logger.info(f"Updated record {record.id}, history length {len(record.history) + 1}")
                return True
        logger.warning(f"Update ignored: no record with id {updated.id}")
        return False

    def remove(self, record_id: str) -> bool:
        """
        Delete a record.

        Returns:
            True if a record was removed
        """
        original_count = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        if len(self._records) < original_count:
            logger.info(f"Removed record {record_id}")
            return True
        logger.warning(f"Remove ignored: no record with id {record_id}")
        return False

    def get(self, record_id: str) -> Optional[CredentialRecord]:
        """Get a record by id."""
        return next((r for r in self._records if r.id == record_id), None)

    def records(self) -> List[CredentialRecord]:
        """All records in insertion order."""
        return self._records.copy()
