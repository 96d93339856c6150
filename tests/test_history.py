from smartvault.history import (
    HistoryEntry, StateSnapshot, now_iso, seed_entry, revision_entry, verify_chain, visible_revisions
)
from smartvault.utils import format_timestamp

from conftest import make_input


def test_seed_entry_starts_empty():
    entry = seed_entry("pw", "memo", now="2025-01-01T00:00:00")
    assert entry.old_state == StateSnapshot("", "")
    assert entry.new_state == StateSnapshot("pw", "memo")
    assert entry.updated_at == "2025-01-01T00:00:00"


def test_chain_integrity_after_sequential_updates(store):
    record = store.register(make_input("Site", password="p0", memo="m0", id="r"))
    n = 5
    for i in range(1, n + 1):
        store.update(make_input("Site", password=f"p{i}", memo=f"m{i}", id="r"))

    history = store.get(record.id).history
    assert len(history) == n + 1
    assert verify_chain(history)
    for previous, following in zip(history, history[1:]):
        assert previous.new_state == following.old_state
    assert history[-1].new_state == StateSnapshot(f"p{n}", f"m{n}")


def test_revision_without_password_change_still_recorded(store):
    store.register(make_input("Site", password="same", memo="a", id="r"))
    store.update(make_input("Renamed", password="same", memo="a", id="r"))
    history = store.get("r").history
    assert len(history) == 2
    assert history[1].old_state == history[1].new_state


def test_verify_chain_detects_break():
    broken = [
        seed_entry("a", ""),
        HistoryEntry(StateSnapshot("x", ""), StateSnapshot("b", ""), "t"),
    ]
    assert not verify_chain(broken)
    assert verify_chain([])


def test_revision_entry_diffs_from_current(store):
    record = store.register(make_input("Site", password="old", memo="note"))
    entry = revision_entry(record, "new", "note2", now="t")
    assert entry.old_state == StateSnapshot("old", "note")
    assert entry.new_state == StateSnapshot("new", "note2")


def test_visible_revisions_skip_seed(store):
    store.register(make_input("Site", id="r"))
    assert visible_revisions(store.get("r").history) == []
    store.update(make_input("Site", password="changed", id="r"))
    revisions = visible_revisions(store.get("r").history)
    assert len(revisions) == 1
    assert revisions[0].new_state.password == "changed"


def test_now_iso_is_utc_with_milliseconds():
    stamp = now_iso()
    assert stamp.endswith("Z")
    assert len(stamp.split(".")[1]) == len("123Z")
    assert format_timestamp(stamp)[:4].isdigit()


def test_format_timestamp_passes_through_garbage():
    assert format_timestamp("") == ""
    assert format_timestamp("yesterday") == "yesterday"
    assert format_timestamp("2025-01-01T00:00:00") == "2025-01-01 00:00:00"
