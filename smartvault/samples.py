"""
Demo records loaded when the desktop app starts.
"""

from typing import List

from smartvault.history import StateSnapshot, seed_entry, revision_entry, now_iso
from smartvault.storage import CredentialRecord

_SAMPLES = [
    ("1", "Google", "user_123", "password123", "https://google.com", "Google account", "search, email, docs"),
    ("2", "Apple", "appleid_user", "password456", "https://apple.com", "Apple ID", "iphone, icloud, app store"),
    ("3", "Amazon", "amazon_shopper", "password789", "https://amazon.com", "Amazon account", "shopping, overseas orders, e-commerce"),
    ("4", "Facebook", "fb_user", "password101", "https://facebook.com", "Facebook login", "social, sns, community"),
    ("5", "Naver", "naver_id", "password112", "https://naver.com", "Naver account", "search, portal, blog"),
    ("6", "Netflix", "netflix_fan", "password134", "https://netflix.com", "Netflix login", "movies, series, streaming"),
]


def sample_records() -> List[CredentialRecord]:
    """Fresh copies of the demo records, timestamped now."""
    now = now_iso()
    records = []
    for record_id, site, username, password, url, memo, keyword in _SAMPLES:
        records.append(CredentialRecord(
            id=record_id,
            site_name=site,
            username=username,
            password=password,
            url=url,
            memo=memo,
            keyword=keyword,
            created_at=now,
            history=[seed_entry(password, memo, now)]
        ))
    # Google was registered with an older password and memo, then updated once.
    google = records[0]
    google.history = [
        seed_entry("initial_password", "initial_memo", now),
        revision_entry(StateSnapshot("initial_password", "initial_memo"), google.password, google.memo, now),
    ]
    return records
