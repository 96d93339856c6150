from smartvault.search import (
    sort_records, filter_records, visible_records, match_tier,
    TIER_SITE_NAME, TIER_KEYWORD, TIER_DETAILS
)
from smartvault.storage import CredentialRecord


def rec(site_name, **kwargs):
    fields = dict(id=site_name, username="", password="p", url="", memo="", keyword="")
    fields.update(kwargs)
    return CredentialRecord(site_name=site_name, **fields)


def names(records):
    return [r.site_name for r in records]


def test_digit_first_names_sort_before_letters():
    records = [rec("Apple"), rec("7-Eleven"), rec("Zoom"), rec("1Password")]
    assert names(sort_records(records)) == ["1Password", "7-Eleven", "Apple", "Zoom"]


def test_sort_is_case_insensitive():
    records = [rec("banana"), rec("Apple"), rec("cherry")]
    assert names(sort_records(records)) == ["Apple", "banana", "cherry"]


def test_sort_is_stable_for_equal_names():
    first = rec("Mail", id="1")
    second = rec("MAIL", id="2")
    assert [r.id for r in sort_records([first, second])] == ["1", "2"]
    assert [r.id for r in sort_records([second, first])] == ["2", "1"]


def test_sort_does_not_mutate_input():
    records = [rec("B"), rec("A")]
    sort_records(records)
    assert names(records) == ["B", "A"]


def test_empty_term_matches_everything():
    records = [rec("Google"), rec("Apple"), rec("7-Eleven")]
    assert len(filter_records(records, "")) == 3


def test_google_scenario():
    records = [rec("Google"), rec("Apple")]
    assert names(filter_records(records, "google")) == ["Google"]


def test_seven_scenario():
    records = [rec("7-Eleven"), rec("Seven Bank")]
    assert names(filter_records(records, "7")) == ["7-Eleven"]


def test_tier_precedence():
    record = rec("Google", keyword="search, email", memo="work account", url="https://google.com", username="goo")
    assert match_tier(record, "GOO") == TIER_SITE_NAME
    assert match_tier(record, "email") == TIER_KEYWORD
    assert match_tier(record, "work") == TIER_DETAILS
    assert match_tier(record, "nothing") is None


def test_details_tier_checks_memo_url_and_username():
    assert match_tier(rec("X", memo="Family plan"), "family") == TIER_DETAILS
    assert match_tier(rec("X", url="https://netflix.com"), "netflix") == TIER_DETAILS
    assert match_tier(rec("X", username="Fan_01"), "fan_") == TIER_DETAILS


def test_empty_keyword_is_skipped():
    assert match_tier(rec("X", keyword=""), "y") is None


def test_filter_preserves_sorted_order():
    records = [rec("Zebra", memo="shared"), rec("2FA", memo="shared"), rec("Alpha", memo="shared")]
    assert names(visible_records(records, "shared")) == ["2FA", "Alpha", "Zebra"]


def test_site_name_match_is_subset_of_empty_term_result():
    records = [rec("Google"), rec("Apple"), rec("Netflix", keyword="movies")]
    everything = visible_records(records, "")
    for term in ("goo", "app", "flix", "movies"):
        for record in visible_records(records, term):
            assert record in everything


def test_no_tokenization():
    records = [rec("Google"), rec("Apple")]
    assert filter_records(records, "google apple") == []
