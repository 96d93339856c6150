"""
JSON snapshot export and import.

DEMO NOTICE:
Snapshots are plain JSON and contain every password in clear text. The file is
written with owner-only permissions but is not encrypted.
"""

import os
import json
import shutil
import logging
from typing import List, Sequence

from smartvault import config
from smartvault.exceptions import SnapshotError
from smartvault.history import now_iso, verify_chain
from smartvault.storage import CredentialRecord
from smartvault.utils import set_owner_only_permissions

logger = logging.getLogger(__name__)


def export_records(filepath: str, records: Sequence[CredentialRecord]) -> None:
    """
    Write records to a snapshot file, replacing it atomically.

    Raises:
        SnapshotError: If the file could not be written
    """
    data = {
        'records': [r.to_dict() for r in records],
        'metadata': {
            'version': config.SNAPSHOT_VERSION,
            'exported_at': now_iso()
        }
    }
    tmp_path = filepath + '.tmp'

    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        shutil.move(tmp_path, filepath)
    except OSError as e:
        logger.error(f"Error writing snapshot {filepath}: {e}", exc_info=True)
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise SnapshotError(f"Could not write snapshot: {e}") from e

    if not set_owner_only_permissions(filepath):
        logger.warning(f"Snapshot {filepath} was written without owner-only permissions.")
    logger.info(f"Exported {len(records)} records to {filepath}")


_TEXT_FIELDS = ("id", "site_name", "username", "password", "url", "memo", "keyword", "created_at")


def _check_record(record: CredentialRecord) -> None:
    """Reject imported records whose fields would break sorting or the history chain."""
    for name in _TEXT_FIELDS:
        if not isinstance(getattr(record, name), str):
            raise SnapshotError(f"Record {record.id}: field {name} must be text")
    for entry in record.history:
        states = (entry.old_state.password, entry.old_state.memo,
                  entry.new_state.password, entry.new_state.memo, entry.updated_at)
        if not all(isinstance(value, str) for value in states):
            raise SnapshotError(f"Record {record.id}: history entries must hold text")
    if not verify_chain(record.history):
        raise SnapshotError(f"Record {record.id}: history chain is broken")


def import_records(filepath: str) -> List[CredentialRecord]:
    """
    Read records from a snapshot file.

    Raises:
        SnapshotError: If the file is missing, unreadable or not a valid snapshot
    """
    if not os.path.exists(filepath):
        raise SnapshotError(f"Snapshot not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error reading snapshot {filepath}: {e}")
        raise SnapshotError(f"Could not read snapshot: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('records'), list):
        raise SnapshotError("Snapshot has no record list")

    metadata = data.get('metadata')
    version = metadata.get('version') if isinstance(metadata, dict) else None
    if version != config.SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version: {version}")

    try:
        records = [CredentialRecord.from_dict(r) for r in data['records']]
    except (KeyError, TypeError) as e:
        raise SnapshotError(f"Malformed record in snapshot: {e}") from e

    for record in records:
        _check_record(record)

    logger.info(f"Imported {len(records)} records from {filepath}")
    return records
