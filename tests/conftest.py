import pytest

from smartvault.storage import RecordStore, RecordInput


class FakeClient:
    """Stands in for GeminiClient; returns a canned payload and records prompts."""

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def call(self, prompt, schema):
        self.calls.append((prompt, schema))
        return self.result


def make_input(site_name, username="user", password="pw", url="", memo="", keyword="", id=None):
    return RecordInput(
        site_name=site_name, username=username, password=password,
        url=url, memo=memo, keyword=keyword, id=id
    )


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def populated_store(store):
    store.register(make_input("Google", "u1", "p1", url="https://google.com", memo="mail", keyword="search, email", id="g"))
    store.register(make_input("Apple", "appleid", "p2", url="https://apple.com", memo="icloud", id="a"))
    store.register(make_input("7-Eleven", "conv", "p3", id="s"))
    return store


@pytest.fixture
def fake_client():
    return FakeClient()
