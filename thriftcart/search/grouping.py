"""Collapse per-platform listings of the same item into cross-platform comparisons."""
from typing import Iterable, List, Optional

from pydantic import BaseModel, SerializeAsAny

from thriftcart.catalog.models import ListingRecord


class GroupedComparison(BaseModel):
    canonical_key: str
    members: List[SerializeAsAny[ListingRecord]]


class ChartPoint(BaseModel):
    label: str
    platform: str
    price: float
    duration_minutes: Optional[float] = None


def group(records: Iterable[ListingRecord]) -> List[GroupedComparison]:
    """Group by case-folded display name, keeping first-seen order of groups and members."""
    buckets: dict[str, List[ListingRecord]] = {}
    for record in records:
        buckets.setdefault(record.display_name.casefold(), []).append(record)
    return [GroupedComparison(canonical_key=key, members=members) for key, members in buckets.items()]


def chart_points(records: Iterable[ListingRecord]) -> List[ChartPoint]:
    """One bar per record, price as the value."""
    return [
        ChartPoint(
            label=r.display_name,
            platform=r.platform,
            price=r.price,
            duration_minutes=r.duration_minutes,
        )
        for r in records
    ]


def chart_series(groups: Iterable[GroupedComparison]) -> List[ChartPoint]:
    return chart_points(member for g in groups for member in g.members)


def cheapest(comparison: GroupedComparison) -> Optional[ListingRecord]:
    if not comparison.members:
        return None
    return min(comparison.members, key=lambda m: m.price)
