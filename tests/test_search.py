import pytest

from thriftcart.search.engine import SortKey, search, sort_records, suggest

from conftest import delivery


def names(records):
    return [(r.display_name, r.platform) for r in records]


def test_milk_sorted_by_price(milk_records):
    hits = search(milk_records, "milk", sort_key="price")
    assert [r.identity for r in hits] == ["Blinkit-0", "Zepto-0"]


def test_every_token_must_match(mixed_records):
    hits = search(mixed_records, "AMUL milk", sort_key=SortKey.PRICE)
    assert names(hits) == [
        ("Amul Taaza Milk", "Blinkit"),
        ("Amul Taaza Milk", "Zepto"),
        ("amul taaza milk", "Swiggy Instamart"),
    ]
    assert search(mixed_records, "amul curd") == []


def test_no_match_and_blank_query(mixed_records):
    assert search(mixed_records, "nonexistent") == []
    assert search(mixed_records, "") == []
    assert search(mixed_records, "   ") == []


def test_max_price_is_inclusive(mixed_records):
    hits = search(mixed_records, "amul", max_price=40)
    assert [r.price for r in hits] == [35, 40]
    assert all(r.price <= 40 for r in hits)


@pytest.mark.parametrize("sort_key", list(SortKey))
def test_search_is_idempotent(mixed_records, sort_key):
    first = search(mixed_records, "amul", sort_key=sort_key)
    second = search(mixed_records, "amul", sort_key=sort_key)
    assert first == second


@pytest.mark.parametrize("sort_key", list(SortKey))
def test_results_are_a_subset(mixed_records, sort_key):
    hits = search(mixed_records, "a", sort_key=sort_key)
    assert all(hit in mixed_records for hit in hits)
    assert len(hits) == len(mixed_records)


def test_sort_by_time_is_stable(mixed_records):
    ordered = sort_records(mixed_records, SortKey.TIME)
    assert [r.duration_minutes for r in ordered] == [8, 8, 10, 10, 12, 15]
    # ties keep input order
    assert names(ordered[:2]) == [("Amul Taaza Milk", "Blinkit"), ("Mother Dairy Curd", "Blinkit")]
    assert names(ordered[2:4]) == [("Amul Taaza Milk", "Zepto"), ("Amul Butter", "Zepto")]


def test_sort_by_rating_descending_and_stable(mixed_records):
    ordered = sort_records(mixed_records, "rating")
    assert [r.rating for r in ordered] == [4.6, 4.5, 4.5, 4.4, 4.4, 4.3]
    assert names(ordered[1:3]) == [("Amul Taaza Milk", "Zepto"), ("amul taaza milk", "Swiggy Instamart")]


def test_sort_by_price_is_stable(mixed_records):
    ordered = sort_records(mixed_records, SortKey.PRICE)
    assert names(ordered[:2]) == [("Amul Taaza Milk", "Blinkit"), ("Mother Dairy Curd", "Blinkit")]


def test_unknown_duration_sorts_last():
    records = [
        delivery("Bread", "Zepto", 50, minutes=None),
        delivery("Bread", "Blinkit", 48, minutes=20),
    ]
    assert [r.platform for r in sort_records(records, "time")] == ["Blinkit", "Zepto"]


def test_unknown_sort_key_rejected(milk_records):
    with pytest.raises(ValueError):
        search(milk_records, "milk", sort_key="popularity")


def test_suggest_unique_names_in_first_seen_order(mixed_records):
    assert suggest(mixed_records, "amul") == ["Amul Taaza Milk", "Amul Butter", "amul taaza milk"]
    assert suggest(mixed_records, "amul", limit=2) == ["Amul Taaza Milk", "Amul Butter"]
    assert suggest(mixed_records, "amul", limit=0) == []
    assert suggest(mixed_records, "") == []
    assert suggest(mixed_records, "xyz") == []
