import pytest

from smartvault.exceptions import DuplicateRecordError
from smartvault.history import StateSnapshot, seed_entry, verify_chain, visible_revisions
from smartvault.samples import sample_records
from smartvault.storage import CredentialRecord, RecordStore

from conftest import make_input


def test_register_creates_seed_history(store):
    record = store.register(make_input("Google", "u1", "p1", memo="", keyword=""))

    assert len(store) == 1
    assert store.get(record.id) is record
    assert record.created_at
    assert len(record.history) == 1
    assert record.history[0].old_state == StateSnapshot("", "")
    assert record.history[0].new_state == StateSnapshot("p1", "")
    assert record.history[0].updated_at == record.created_at


def test_register_assigns_unique_ids(store):
    first = store.register(make_input("A"))
    second = store.register(make_input("B"))
    assert first.id and second.id
    assert first.id != second.id


def test_register_keeps_supplied_id(store):
    record = store.register(make_input("A", id="custom"))
    assert record.id == "custom"
    assert "custom" in store


def test_register_rejects_duplicate_id(store):
    store.register(make_input("A", id="x"))
    with pytest.raises(DuplicateRecordError):
        store.register(make_input("B", id="x"))
    assert len(store) == 1


def test_update_appends_revision_and_replaces_fields(populated_store):
    before = populated_store.get("g")
    ok = populated_store.update(make_input(
        "Google Mail", "u2", "new-pw", url="https://mail.google.com", memo="work", keyword="mail", id="g"
    ))

    assert ok is True
    after = populated_store.get("g")
    assert after.site_name == "Google Mail"
    assert after.username == "u2"
    assert after.password == "new-pw"
    assert after.url == "https://mail.google.com"
    assert after.keyword == "mail"
    assert after.created_at == before.created_at
    assert len(after.history) == 2
    assert after.history[0] == before.history[0]
    assert after.history[1].old_state == StateSnapshot("p1", "mail")
    assert after.history[1].new_state == StateSnapshot("new-pw", "work")


def test_update_keeps_position(populated_store):
    ids_before = [r.id for r in populated_store.records()]
    populated_store.update(make_input("Zzz", id="g"))
    assert [r.id for r in populated_store.records()] == ids_before


def test_update_missing_id_is_noop(populated_store):
    snapshot = populated_store.records()
    assert populated_store.update(make_input("Ghost", id="missing")) is False
    assert populated_store.records() == snapshot


def test_remove(populated_store):
    assert populated_store.remove("a") is True
    assert "a" not in populated_store
    assert [r.id for r in populated_store.records()] == ["g", "s"]


def test_remove_missing_id_is_noop(populated_store):
    snapshot = populated_store.records()
    assert populated_store.remove("missing") is False
    assert populated_store.records() == snapshot


def test_get_missing_returns_none(store):
    assert store.get("nope") is None


def test_records_returns_copy(populated_store):
    records = populated_store.records()
    records.clear()
    assert len(populated_store) == 3


def test_load_rejects_duplicate_ids():
    record = CredentialRecord(id="1", site_name="A", username="u", password="p")
    with pytest.raises(DuplicateRecordError):
        RecordStore([record, record])


def test_sample_records_load():
    store = RecordStore(sample_records())
    assert len(store) == 6
    assert store.get("1").site_name == "Google"
    for record in store.records():
        assert record.history[0].old_state == StateSnapshot("", "")
        assert record.history[-1].new_state == StateSnapshot(record.password, record.memo)
        assert verify_chain(record.history)
    assert len(store.get("1").history) == 2
    assert store.get("2").history == [seed_entry("password456", "Apple ID", store.get("2").created_at)]


def test_sample_record_edit_shows_in_history():
    store = RecordStore(sample_records())
    store.update(make_input("Apple", "appleid_user", "newpass", memo="Apple ID", id="2"))

    history = store.get("2").history
    assert len(history) == 2
    assert verify_chain(history)
    assert [e.new_state.password for e in visible_revisions(history)] == ["newpass"]


def test_dict_roundtrip_uses_camel_case(populated_store):
    record = populated_store.get("g")
    data = record.to_dict()
    assert data["siteName"] == "Google"
    assert data["createdAt"] == record.created_at
    assert data["history"][0]["oldState"] == {"password": "", "memo": ""}
    assert CredentialRecord.from_dict(data) == record
