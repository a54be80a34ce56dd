"""
Free-text search over listing records.

Matching is AND over whitespace tokens: a record is returned only when every
token is a substring of its display name (case-insensitive). All functions
here are pure and total over well-formed records.
"""
import math
from enum import Enum
from typing import Iterable, List, Optional, Sequence, TypeVar

from thriftcart.catalog.models import ListingRecord

R = TypeVar("R", bound=ListingRecord)


class SortKey(str, Enum):
    TIME = "time"
    PRICE = "price"
    RATING = "rating"


def tokenize(text: str) -> List[str]:
    return text.casefold().split()


def matches(name: str, tokens: Sequence[str]) -> bool:
    folded = name.casefold()
    return all(tok in folded for tok in tokens)


def sort_records(records: Iterable[R], sort_key: SortKey | str) -> List[R]:
    """Stable sort: time and price ascending, rating descending. Unknown durations sort last."""
    key = SortKey(sort_key)
    if key is SortKey.TIME:
        return sorted(
            records,
            key=lambda r: r.duration_minutes if r.duration_minutes is not None else math.inf,
        )
    if key is SortKey.RATING:
        return sorted(records, key=lambda r: -r.rating)
    return sorted(records, key=lambda r: r.price)


def search(
    records: Iterable[R],
    query_text: str,
    max_price: Optional[float] = None,
    sort_key: SortKey | str = SortKey.PRICE,
) -> List[R]:
    tokens = tokenize(query_text)
    if not tokens:
        return []
    hits = [r for r in records if matches(r.display_name, tokens)]
    if max_price is not None:
        hits = [r for r in hits if r.price <= max_price]
    return sort_records(hits, sort_key)


def suggest(records: Iterable[ListingRecord], partial_text: str, limit: Optional[int] = None) -> List[str]:
    """Unique display names matching ``partial_text``, in first-seen order."""
    tokens = tokenize(partial_text)
    if not tokens or (limit is not None and limit <= 0):
        return []
    seen: dict[str, None] = {}
    for record in records:
        if record.display_name not in seen and matches(record.display_name, tokens):
            seen[record.display_name] = None
            if limit is not None and len(seen) >= limit:
                break
    return list(seen)
