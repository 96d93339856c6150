"""
Sorting and tiered search over credential records.
"""

from typing import List, Optional, Sequence, Tuple

from smartvault.storage import CredentialRecord

TIER_SITE_NAME = 1
TIER_KEYWORD = 2
TIER_DETAILS = 3


def sort_key(record: CredentialRecord) -> Tuple[int, str]:
    """Names starting with a digit first, then case-folded lexicographic order."""
    name = record.site_name.upper()
    return (0 if name[:1].isdigit() else 1, name)


def sort_records(records: Sequence[CredentialRecord]) -> List[CredentialRecord]:
    """Return a new list in display order; equal keys keep their input order."""
    return sorted(records, key=sort_key)


def match_tier(record: CredentialRecord, term: str) -> Optional[int]:
    """
    Find the first field tier that contains the search term.

    Tiers are checked in priority order: site name, keyword, then memo / URL /
    username. Matching is a case-insensitive substring test and an empty term
    matches at tier 1.

    Returns:
        The matching tier number, or None if the record does not match
    """
    needle = term.lower()

    if needle in record.site_name.lower():
        return TIER_SITE_NAME

    if record.keyword and needle in record.keyword.lower():
        return TIER_KEYWORD

    if (needle in record.memo.lower()
            or needle in record.url.lower()
            or needle in record.username.lower()):
        return TIER_DETAILS

    return None


def matches(record: CredentialRecord, term: str) -> bool:
    return match_tier(record, term) is not None


def filter_records(records: Sequence[CredentialRecord], term: str) -> List[CredentialRecord]:
    """Keep matching records without changing their order."""
    return [r for r in records if matches(r, term)]


def visible_records(records: Sequence[CredentialRecord], term: str) -> List[CredentialRecord]:
    """Sort, then filter: the list the user sees for a given search term."""
    return filter_records(sort_records(records), term)
